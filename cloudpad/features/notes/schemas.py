"""
➡️ But : Définir les formats d’entrée/sortie de l’API des notes (couche validation).

SaveIn → corps de requête POST /save ({noteId, content})

NoteOut → réponse de l’API (clés camelCase, comme le client JS les attend)

🔹 Avantages :

Validation automatique.

Sépare les modèles "de stockage" (ORM) de ceux "de transfert" (I/O API).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SaveIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    note_id: Optional[int] = Field(None, examples=[1])
    content: str = Field("", examples=["draft"])


class NoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    owner_id: int
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
