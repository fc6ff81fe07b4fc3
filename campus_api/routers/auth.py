from __future__ import annotations

from fastapi import APIRouter, Request, status

from campus_api.routers import app_service
from campus_api.schemas import LoginRequest, LoginResponse, SignupRequest, SignupResponse, UserOut
from campus_api.services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


def _auth_service(request: Request) -> AuthService:
    return app_service(request, "auth_service")


@router.post("/register", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def register(payload: SignupRequest, request: Request):
    user = _auth_service(request).register(payload.username, payload.password, payload.full_name, payload.college)
    return SignupResponse(message="registration successful", user=UserOut.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, request: Request):
    result = _auth_service(request).login(payload.username, payload.password)
    return LoginResponse(message="login successful", token=result.token, user=UserOut.model_validate(result.user))
