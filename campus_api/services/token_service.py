"""Signed bearer tokens (HMAC JWT) carrying user identity and role.

Only the configured HMAC algorithm is accepted on decode, so unsigned
(``alg: none``) and asymmetric-algorithm tokens are rejected outright.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone

import jwt
from jwt import InvalidTokenError

from campus_api.core.errors import Unauthenticated
from campus_api.domain.roles import Role

logger = logging.getLogger(__name__)

HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})
DEFAULT_TTL_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    username: str
    role: Role
    expires_at: datetime


class TokenService:
    """Issues and verifies access tokens with one process-wide secret."""

    def __init__(self, secret: str, *, ttl_seconds: int = DEFAULT_TTL_SECONDS, algorithm: str = "HS256") -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"unsupported signing algorithm: {algorithm}")
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm

    def issue(self, user_id: int, username: str, role: Role | str, ttl: int | None = None) -> str:
        role_value = Role.parse(role)
        if role_value is None:
            raise ValueError(f"unknown role: {role}")
        lifetime = self.ttl_seconds if ttl is None else ttl
        payload = {
            "id": int(user_id),
            "username": username,
            "role": role_value.value,
            "exp": int(time.time()) + int(lifetime),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode ``token`` and return typed claims.

        Raises Unauthenticated for a bad signature, a foreign algorithm, an
        expired or missing ``exp`` and malformed claims alike.
        """
        if not token:
            raise Unauthenticated("missing token")
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") != self.algorithm:
                raise InvalidTokenError(f"unexpected signing algorithm {header.get('alg')!r}")
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "id", "role"]},
            )
        except jwt.ExpiredSignatureError as exc:
            logger.info("rejected expired token")
            raise Unauthenticated("token expired") from exc
        except InvalidTokenError as exc:
            logger.warning("rejected invalid token: %s", exc.__class__.__name__)
            raise Unauthenticated("invalid token") from exc

        user_id = payload.get("id")
        role = Role.parse(payload.get("role"))
        if isinstance(user_id, bool) or not isinstance(user_id, int) or role is None:
            logger.warning("rejected token with malformed claims")
            raise Unauthenticated("invalid token")
        return TokenClaims(
            user_id=user_id,
            username=str(payload.get("username") or ""),
            role=role,
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
        )
