from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import RedirectResponse

from cloudpad.api.dependencies import (
    get_auth_service,
    get_current_session,
    get_session_token,
    get_settings,
)
from cloudpad.core.config import Settings
from cloudpad.features.authentication.services import AuthService
from cloudpad.features.authentication.schemas import CredentialsIn, LoginOut, MeOut, RegisterOut
from cloudpad.security.sessions import SessionData

router = APIRouter(
    tags=["auth"],
)


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite=settings.SESSION_COOKIE_SAMESITE,
        secure=settings.SESSION_COOKIE_SECURE,
        max_age=settings.SESSION_COOKIE_MAX_AGE,
        path=settings.SESSION_COOKIE_PATH,
    )

# -----------------------------
# Register
# -----------------------------
@router.post(
    "/register",
    summary="Créer un compte",
    description="Crée l'utilisateur et ouvre directement une session (cookie httpOnly).",
    response_model=RegisterOut,
    responses={409: {"description": "Nom d'utilisateur déjà pris"}},
)
def register(
    payload: CredentialsIn,
    response: Response,
    svc: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    _, token = svc.register(payload.username, payload.password)
    _set_session_cookie(response, token, settings)
    return RegisterOut()

# -----------------------------
# Login
# -----------------------------
@router.post(
    "/login",
    summary="Se connecter",
    description="Régénère la session (l'ancien cookie devient invalide) et la pose en cookie httpOnly.",
    response_model=LoginOut,
    responses={401: {"description": "Utilisateur inconnu ou mauvais mot de passe"}},
)
def login(
    payload: CredentialsIn,
    response: Response,
    current_token: Optional[str] = Depends(get_session_token),
    svc: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    session, token = svc.login(payload.username, payload.password, current_token=current_token)
    _set_session_cookie(response, token, settings)
    return LoginOut(is_admin=session.is_admin)

# -----------------------------
# Logout
# -----------------------------
@router.get(
    "/logout",
    summary="Se déconnecter",
    status_code=status.HTTP_303_SEE_OTHER,
    response_class=RedirectResponse,
)
def logout(
    token: Optional[str] = Depends(get_session_token),
    svc: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    svc.logout(token)
    redirect = RedirectResponse(settings.LOGOUT_REDIRECT_URL, status_code=status.HTTP_303_SEE_OTHER)
    # Supprime le cookie côté client
    redirect.delete_cookie(key=settings.SESSION_COOKIE_NAME, path=settings.SESSION_COOKIE_PATH)
    return redirect

# -----------------------------
# Me (profil courant)
# -----------------------------
@router.get(
    "/me",
    summary="Récupérer l'utilisateur courant",
    response_model=MeOut,
    responses={401: {"description": "Pas de session ou session expirée"}},
)
def me(current: SessionData = Depends(get_current_session)):
    return MeOut(username=current.username)
