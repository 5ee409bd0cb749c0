"""
➡️ But : Définir les endpoints des notes.

Chaque route dépend de get_current_session : sans cookie valide -> 401 avant tout accès DB.
Le user_id passé au service vient toujours de la session, jamais du corps de la requête.
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from cloudpad.api.dependencies import get_current_session, get_note_service
from cloudpad.features.notes.schemas import NoteOut, SaveIn
from cloudpad.features.notes.services import NoteService
from cloudpad.security.sessions import SessionData

router = APIRouter(
    tags=["notes"],
    responses={401: {"description": "Not logged in"}},
)

@router.get(
    "/notes",
    summary="Lister mes notes",
    description="La plus récemment modifiée en premier.",
    response_model=List[NoteOut],
)
def list_notes(
    current: SessionData = Depends(get_current_session),
    svc: NoteService = Depends(get_note_service),
):
    return svc.list(current.user_id)

@router.post(
    "/notes/new",
    summary="Créer une note vide",
    response_model=NoteOut,
)
def new_note(
    current: SessionData = Depends(get_current_session),
    svc: NoteService = Depends(get_note_service),
):
    return svc.create_new(current.user_id)

@router.post(
    "/save",
    summary="Sauvegarder le contenu d'une note",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "saved"},
        400: {"description": "noteId manquant"},
        403: {"description": "Note d'un autre utilisateur"},
        404: {"description": "Note introuvable"},
    },
)
def save(
    payload: SaveIn,
    current: SessionData = Depends(get_current_session),
    svc: NoteService = Depends(get_note_service),
):
    svc.save(current.user_id, payload.note_id, payload.content)
    return "saved"
