import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError

from cloudpad.core.errors import DuplicateUser, InvalidUser, NotLoggedIn, WrongPassword
from cloudpad.db.repositories.users import UserRepository
from cloudpad.security.password import hash_password, verify_password
from cloudpad.security.sessions import SessionData, SessionManager

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service d'authentification : orchestre le repository des comptes + le SessionManager.
    Ne contient pas d'accès SQL direct et lève les erreurs métier de cloudpad.core.errors.
    """

    def __init__(self, *, user_repo: UserRepository, sessions: SessionManager):
        self.user_repo = user_repo
        self.sessions = sessions

    # ---------- Register ----------
    def register(self, username: str, password: str) -> Tuple[SessionData, str]:
        if self.user_repo.get_by_username(username):
            logger.info("Register refused, username taken: %s", username)
            raise DuplicateUser()

        try:
            user = self.user_repo.create(
                username=username,
                hashed_password=hash_password(password),
            )
        except IntegrityError:
            # deux inscriptions simultanées : l'index unique tranche
            logger.info("Register refused, username taken concurrently: %s", username)
            raise DuplicateUser()
        token = self.sessions.create(user)
        logger.info("User registered: %s (id=%s)", user.username, user.id)
        return self.sessions.validate(token), token

    # ---------- Login ----------
    def login(self, username: str, password: str, *, current_token: Optional[str] = None) -> Tuple[SessionData, str]:
        user = self.user_repo.get_by_username(username)
        if not user:
            logger.warning("Login failed, unknown user: %s", username)
            raise InvalidUser()
        if not verify_password(password, user.hashed_password):
            logger.warning("Login failed, wrong password for: %s", username)
            raise WrongPassword()

        # nouvelle session, l'éventuelle ancienne est révoquée
        token = self.sessions.regenerate(current_token, user=user)
        logger.info("User logged in: %s", user.username)
        return self.sessions.validate(token), token

    # ---------- Logout ----------
    def logout(self, token: Optional[str]) -> None:
        self.sessions.destroy(token)

    # ---------- Session courante ----------
    def current(self, token: Optional[str]) -> SessionData:
        session = self.sessions.validate(token)
        if session is None:
            raise NotLoggedIn()
        return session
