import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, TypedDict

from jose import jwt, JWTError

from cloudpad.core.errors import NotLoggedIn
from cloudpad.db.models.base import utcnow
from cloudpad.db.repositories.sessions import SessionRepository

logger = logging.getLogger(__name__)

# ==========================================================
# 🔧 Configuration : signature du cookie + durée de vie
# ==========================================================

@dataclass(frozen=True)
class SessionSettings:
    """
    Configuration des sessions.

    - `secret` : clé secrète pour signer/valider le cookie
    - `algorithm` : algo de signature (HS256)
    - `ttl` : durée de vie d'une session côté serveur
    """
    secret: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(hours=24)


# ==========================================================
# 🧱 Types
# ==========================================================

@dataclass(frozen=True)
class SessionData:
    """Ce que le serveur sait d'une session valide."""
    sid: str
    user_id: int
    username: str
    is_admin: bool
    expires_at: datetime


class CookieClaims(TypedDict, total=False):
    sid: str
    iat: int
    exp: int


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def new_sid() -> str:
    """Identifiant de session imprévisible."""
    return secrets.token_urlsafe(32)


def _epoch(dt: datetime) -> int:
    # les datetimes stockés sont en UTC naïf
    return int(dt.replace(tzinfo=timezone.utc).timestamp())


def encode_cookie(sid: str, *, expires_at: datetime, issued_at: datetime, settings: SessionSettings) -> str:
    claims: CookieClaims = {
        "sid": sid,
        "iat": _epoch(issued_at),
        "exp": _epoch(expires_at),
    }
    return jwt.encode(claims, settings.secret, algorithm=settings.algorithm)


def decode_cookie(token: str, settings: SessionSettings) -> Optional[str]:
    """Retourne le sid si la signature est bonne, sinon None."""
    try:
        claims = jwt.decode(token, settings.secret, algorithms=[settings.algorithm])
    except JWTError:
        return None
    sid = claims.get("sid")
    return sid if isinstance(sid, str) and sid else None


# ==========================================================
# 🎟️ SessionManager
# ==========================================================

class SessionManager:
    """
    Émet, renouvelle, valide et détruit les sessions.

    Le cookie ne contient que le sid signé ; l'identité (user_id, username, is_admin)
    reste côté serveur dans la table SessionRecord.
    """

    def __init__(
        self,
        *,
        repo: SessionRepository,
        settings: SessionSettings,
        now_fn: Callable[[], datetime] = utcnow,
    ):
        self.repo = repo
        self.settings = settings
        self.now_fn = now_fn

    def _issue(self, *, user_id: int, username: str, is_admin: bool) -> str:
        now = self.now_fn()
        sid = new_sid()
        expires_at = now + self.settings.ttl
        self.repo.create(
            sid=sid,
            user_id=user_id,
            username=username,
            is_admin=is_admin,
            expires_at=expires_at,
        )
        return encode_cookie(sid, expires_at=expires_at, issued_at=now, settings=self.settings)

    # ---------- create ----------
    def create(self, user) -> str:
        return self._issue(user_id=user.id, username=user.username, is_admin=user.admin)

    # ---------- validate ----------
    def validate(self, token: Optional[str]) -> Optional[SessionData]:
        if not token:
            return None
        sid = decode_cookie(token, self.settings)
        if not sid:
            return None
        record = self.repo.get_active(sid, now=self.now_fn())
        if not record:
            return None
        return SessionData(
            sid=record.sid,
            user_id=record.user_id,
            username=record.username,
            is_admin=record.is_admin,
            expires_at=record.expires_at,
        )

    # ---------- regenerate ----------
    def regenerate(self, token: Optional[str], *, user=None) -> str:
        """
        Nouveau token, l'ancien est révoqué (anti fixation de session).
        Sans `user`, le contenu de l'ancienne session est conservé.
        """
        current = self.validate(token)
        if user is None and current is None:
            raise NotLoggedIn()

        if current is not None:
            self.repo.revoke(current.sid)

        if user is not None:
            return self.create(user)
        return self._issue(
            user_id=current.user_id,
            username=current.username,
            is_admin=current.is_admin,
        )

    # ---------- destroy ----------
    def destroy(self, token: Optional[str]) -> None:
        # idempotent : un cookie illisible ou déjà révoqué ne lève rien
        if not token:
            return
        sid = decode_cookie(token, self.settings)
        if sid:
            self.repo.revoke(sid)

    def prune_expired(self) -> int:
        removed = self.repo.delete_expired(now=self.now_fn())
        if removed:
            logger.info("Pruned %d expired sessions", removed)
        return removed
