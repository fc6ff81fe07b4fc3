from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from campus_api.routers import RowId, app_service
from campus_api.schemas import MessageOut, RegistrationDetailOut, RegistrationOut, StatusUpdate
from campus_api.services.auth_gate import require_admin
from campus_api.services.registration_service import RegistrationService
from campus_api.services.token_service import TokenClaims

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _registrations(request: Request) -> RegistrationService:
    return app_service(request, "registration_service")


@router.get("/registrations", response_model=list[RegistrationDetailOut], dependencies=[Depends(require_admin)])
def list_registrations(request: Request):
    return _registrations(request).list_all()


@router.put("/registrations/{registration_id}/status", response_model=RegistrationOut)
def update_registration_status(
    registration_id: RowId,
    payload: StatusUpdate,
    request: Request,
    admin: TokenClaims = Depends(require_admin),
):
    return _registrations(request).update_status(registration_id, payload.status, admin.role)


@router.delete("/registrations/{registration_id}", response_model=MessageOut, dependencies=[Depends(require_admin)])
def delete_registration(registration_id: RowId, request: Request):
    _registrations(request).admin_delete(registration_id)
    return MessageOut(message="registration deleted")
