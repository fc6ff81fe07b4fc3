from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from campus_api.routers import RowId, app_service
from campus_api.schemas import (
    ActivityCreate,
    ActivityDetailOut,
    ActivityOut,
    MessageOut,
    RegistrantOut,
    RegistrationOut,
)
from campus_api.services.activity_service import ActivityService
from campus_api.services.auth_gate import current_identity
from campus_api.services.registration_service import RegistrationService
from campus_api.services.token_service import TokenClaims

router = APIRouter(prefix="/api/activities", tags=["activities"])


def _activities(request: Request) -> ActivityService:
    return app_service(request, "activity_service")


def _registrations(request: Request) -> RegistrationService:
    return app_service(request, "registration_service")


@router.get("", response_model=list[ActivityOut])
def list_activities(request: Request, category: Optional[str] = None, search: Optional[str] = None):
    return _activities(request).list(category=category, search=search)


@router.get("/{activity_id}", response_model=ActivityDetailOut)
def get_activity(activity_id: RowId, request: Request):
    detail = _activities(request).get(activity_id)
    base = ActivityOut.model_validate(detail.activity)
    return ActivityDetailOut(**base.model_dump(), registered_count=detail.registered_count)


@router.post("", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
def create_activity(payload: ActivityCreate, request: Request, identity: TokenClaims = Depends(current_identity)):
    return _activities(request).create(identity.user_id, **payload.model_dump())


@router.delete("/{activity_id}", response_model=MessageOut, dependencies=[Depends(current_identity)])
def delete_activity(activity_id: RowId, request: Request):
    _activities(request).delete(activity_id)
    return MessageOut(message="activity deleted")


@router.post("/{activity_id}/register", response_model=RegistrationOut, status_code=status.HTTP_201_CREATED)
def register_for_activity(activity_id: RowId, request: Request, identity: TokenClaims = Depends(current_identity)):
    return _registrations(request).register(identity.user_id, activity_id)


@router.get("/{activity_id}/registrations", response_model=list[RegistrantOut])
def list_activity_registrations(activity_id: RowId, request: Request):
    return _registrations(request).list_for_activity(activity_id)
