"""
➡️ But : Contenir la logique métier des notes : lister, créer, sauvegarder.

NoteService : chaque opération reçoit le user_id de la session et vérifie la propriété
de la note (_ensure_owner) avant toute mutation.

🔹 Avantages :

Le contrôle d'accès est à un seul endroit, facile à auditer.

Test unitaire possible sans passer par FastAPI.

⚠️ Pas de contrôle de version : deux onglets qui sauvegardent la même note,
le dernier écrit gagne.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional, Sequence

from cloudpad.core.errors import Forbidden, MissingNoteId, NotFound
from cloudpad.db.models.base import utcnow
from cloudpad.db.models.notes import Note
from cloudpad.db.repositories.notes import NoteRepository

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"


class NoteService:
    def __init__(self, repo: NoteRepository, *, now_fn: Callable[[], datetime] = utcnow):
        self.repo = repo
        self.now_fn = now_fn

    # --------------- Helpers ---------------
    def _ensure_owner(self, note_id: Optional[int], *, user_id: int) -> Note:
        # 0 ou négatif : aucun id valide, traité comme absent
        if note_id is None or note_id < 1:
            raise MissingNoteId()
        note = self.repo.get(note_id)
        if not note:
            raise NotFound("Note not found")
        if note.owner_id != user_id:
            logger.warning("User %s tried to write note %s owned by %s", user_id, note_id, note.owner_id)
            raise Forbidden()
        return note

    def _next_timestamp(self, note: Note) -> datetime:
        now = self.now_fn()
        if note.updated_at and now <= note.updated_at:
            # horloge trop grossière : on avance quand même
            now = note.updated_at + timedelta(microseconds=1)
        return now

    # --------------- Queries ---------------
    def list(self, user_id: int) -> Sequence[Note]:
        return self.repo.list_for_owner(user_id)

    # --------------- Commands ---------------
    def create_new(self, user_id: int) -> Note:
        now = self.now_fn()
        return self.repo.create(
            owner_id=user_id,
            title=DEFAULT_TITLE,
            content="",
            created_at=now,
            updated_at=now,
        )

    def save(self, user_id: int, note_id: Optional[int], content: str) -> Note:
        note = self._ensure_owner(note_id, user_id=user_id)
        return self.repo.update(
            note,
            content=content,
            updated_at=self._next_timestamp(note),
        )
