"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_auth_service() : crée un AuthService à partir d’une session DB.

get_current_session() : lit le cookie cloudpad.sid et renvoie la session, ou 401.

require_admin() : idem + 403 si la session n'est pas admin.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

from typing import Optional

from fastapi import Depends, Request
from sqlmodel import Session

from cloudpad.core.config import Settings
from cloudpad.db.session import get_session

from cloudpad.db.repositories.users import UserRepository
from cloudpad.db.repositories.notes import NoteRepository
from cloudpad.db.repositories.sessions import SessionRepository

from cloudpad.features.authentication.services import AuthService
from cloudpad.features.notes.services import NoteService
from cloudpad.features.admin.services import AdminService

from cloudpad.security.sessions import SessionData, SessionManager


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# -----------------------------
# Sessions
# -----------------------------
def get_session_manager(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> SessionManager:
    return SessionManager(
        repo=SessionRepository(session),
        settings=settings.session_settings,
    )


def get_session_token(request: Request, settings: Settings = Depends(get_settings)) -> Optional[str]:
    # nom du cookie configurable : lecture directe plutôt que Cookie(alias=...)
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


# -----------------------------
# Auth
# -----------------------------
def get_auth_service(
    session: Session = Depends(get_session),
    sessions: SessionManager = Depends(get_session_manager),
) -> AuthService:
    return AuthService(user_repo=UserRepository(session), sessions=sessions)


def get_current_session(
    token: Optional[str] = Depends(get_session_token),
    svc: AuthService = Depends(get_auth_service),
) -> SessionData:
    return svc.current(token)


# -----------------------------
# Notes
# -----------------------------
def get_note_service(session: Session = Depends(get_session)) -> NoteService:
    return NoteService(NoteRepository(session))


# -----------------------------
# Admin
# -----------------------------
def get_admin_service(session: Session = Depends(get_session)) -> AdminService:
    return AdminService(UserRepository(session))


def require_admin(current: SessionData = Depends(get_current_session)) -> SessionData:
    AdminService.ensure_admin(current)
    return current
