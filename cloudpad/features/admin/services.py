from typing import List

from cloudpad.core.errors import Forbidden
from cloudpad.db.repositories.users import UserRepository
from cloudpad.features.admin.schemas import StatsOut, UserOut
from cloudpad.security.sessions import SessionData


class AdminService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    @staticmethod
    def ensure_admin(session: SessionData) -> None:
        if not session.is_admin:
            raise Forbidden("Admin only")

    def list_users(self) -> List[UserOut]:
        return [
            UserOut(id=u.id, username=u.username, is_admin=u.admin, created_at=u.created_at)
            for u in self.repo.all()
        ]

    def stats(self) -> StatsOut:
        return StatsOut(total_users=self.repo.count())
