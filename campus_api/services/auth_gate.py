"""Request authentication and role gating."""
from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends, Request

from campus_api.core.errors import Forbidden, Unauthenticated
from campus_api.domain.roles import Role
from campus_api.routers import app_service
from campus_api.services.token_service import TokenClaims, TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer"


class AuthGate:
    """Turns an Authorization header into verified claims; keeps no state between requests."""

    def __init__(self, tokens: TokenService) -> None:
        self.tokens = tokens

    def authenticate(self, authorization: str | None) -> TokenClaims:
        header = (authorization or "").strip()
        if not header:
            raise Unauthenticated("missing bearer token")
        parts = header.split()
        if len(parts) != 2 or parts[0].lower() != BEARER_PREFIX:
            raise Unauthenticated("malformed authorization header")
        return self.tokens.verify(parts[1])

    @staticmethod
    def authorize(claims: TokenClaims, role: Role) -> TokenClaims:
        if claims.role != role:
            logger.warning("user %s with role %s denied %s-only operation", claims.user_id, claims.role.value, role.value)
            raise Forbidden(f"{role.value} role required")
        return claims


def _get_gate(request: Request) -> AuthGate:
    return app_service(request, "auth_gate")


def current_identity(request: Request) -> TokenClaims:
    """FastAPI dependency: authenticate the caller and keep the claims on request.state."""
    claims = _get_gate(request).authenticate(request.headers.get("authorization"))
    request.state.identity = claims
    return claims


def require_role(role: Role) -> Callable[..., TokenClaims]:
    """Build a dependency that authenticates and then insists on ``role``."""

    def dependency(claims: TokenClaims = Depends(current_identity)) -> TokenClaims:
        return AuthGate.authorize(claims, role)

    return dependency


require_admin = require_role(Role.ADMIN)
