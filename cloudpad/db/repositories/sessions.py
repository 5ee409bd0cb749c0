from datetime import datetime
from typing import Optional
from sqlmodel import select

from cloudpad.db.repositories.base import BaseRepository
from cloudpad.db.models.base import utcnow
from cloudpad.db.models.sessions import SessionRecord

class SessionRepository(BaseRepository[SessionRecord]):
    model = SessionRecord

    def get_by_sid(self, sid: str) -> Optional[SessionRecord]:
        return self.session.exec(
            select(self.model).where(self.model.sid == sid)
        ).first()

    def get_active(self, sid: str, *, now: datetime) -> Optional[SessionRecord]:
        """Session ni révoquée ni expirée, ou None."""
        return self.session.exec(
            select(self.model)
            .where(self.model.sid == sid)
            .where(self.model.revoked_at.is_(None))
            .where(self.model.expires_at > now)
        ).first()

    def revoke(self, sid: str) -> bool:
        record = self.get_by_sid(sid)
        if not record or record.revoked_at:
            return False
        record.revoked_at = utcnow()
        self.session.add(record)
        self._commit()
        return True

    def delete_expired(self, *, now: datetime) -> int:
        expired = self.session.exec(
            select(self.model).where(self.model.expires_at <= now)
        ).all()
        for record in expired:
            self.session.delete(record)
        self._commit()
        return len(expired)
