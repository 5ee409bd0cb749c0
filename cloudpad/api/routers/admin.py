from typing import List

from fastapi import APIRouter, Depends

from cloudpad.api.dependencies import get_admin_service, require_admin
from cloudpad.features.admin.schemas import StatsOut, UserOut
from cloudpad.features.admin.services import AdminService

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
    responses={
        401: {"description": "Not logged in"},
        403: {"description": "Admin only"},
    },
)

@router.get("/users", summary="Lister les comptes (sans mot de passe)", response_model=List[UserOut])
def list_users(svc: AdminService = Depends(get_admin_service)):
    return svc.list_users()

@router.get("/stats", summary="Statistiques", response_model=StatsOut)
def stats(svc: AdminService = Depends(get_admin_service)):
    return svc.stats()
