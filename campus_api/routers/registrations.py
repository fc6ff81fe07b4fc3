from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from campus_api.routers import RowId, app_service
from campus_api.schemas import MessageOut, UserRegistrationOut
from campus_api.services.auth_gate import current_identity
from campus_api.services.registration_service import RegistrationService
from campus_api.services.token_service import TokenClaims

router = APIRouter(prefix="/api", tags=["registrations"])


def _registrations(request: Request) -> RegistrationService:
    return app_service(request, "registration_service")


@router.delete("/registrations/{registration_id}", response_model=MessageOut)
def cancel_registration(registration_id: RowId, request: Request, identity: TokenClaims = Depends(current_identity)):
    _registrations(request).cancel(registration_id, identity.user_id)
    return MessageOut(message="registration cancelled")


@router.get("/users/{user_id}/registrations", response_model=list[UserRegistrationOut])
def list_user_registrations(user_id: RowId, request: Request):
    return _registrations(request).list_for_user(user_id)
