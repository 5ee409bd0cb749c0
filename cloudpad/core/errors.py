"""
➡️ But : Définir les erreurs métier de CloudPad.

Les services lèvent ces exceptions (pas de HTTPException dans le métier),
un handler unique dans main.py les traduit en réponse HTTP {"detail": ...}.

🔹 Avantages :

Services testables sans FastAPI.

Une seule table erreur -> code HTTP.
"""

from fastapi import status


class CloudPadError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Bad request"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


# ---------- Authentification ----------

class DuplicateUser(CloudPadError):
    status_code = status.HTTP_409_CONFLICT
    detail = "User already exists"


class InvalidUser(CloudPadError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid user"


class WrongPassword(CloudPadError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Wrong password"


class NotLoggedIn(CloudPadError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not logged in"


# ---------- Autorisation / ressources ----------

class Forbidden(CloudPadError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Forbidden"


class MissingNoteId(CloudPadError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "noteId missing"


class NotFound(CloudPadError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


# ---------- Stockage ----------

class StorageError(CloudPadError):
    # message générique : le détail reste dans les logs serveur
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Storage error"
