from typing import Sequence
from sqlmodel import select

from cloudpad.db.repositories.base import BaseRepository
from cloudpad.db.models.notes import Note

class NoteRepository(BaseRepository[Note]):
    model = Note

    def list_for_owner(self, owner_id: int) -> Sequence[Note]:
        """Notes d'un utilisateur, la plus récemment modifiée en premier."""
        return self.session.exec(
            select(self.model)
            .where(self.model.owner_id == owner_id)
            .order_by(self.model.updated_at.desc(), self.model.id.desc())
        ).all()
