"""
Account sign-up and login use cases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from campus_api.core.errors import Conflict, Unauthenticated, ValidationError
from campus_api.core.security import hash_password, needs_rehash, verify_password
from campus_api.db.models import User
from campus_api.domain.roles import DEFAULT_ROLE, Role
from campus_api.repositories.sql_repository import DuplicateEntryError, SQLRepository
from campus_api.services.token_service import TokenService

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 4
MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "invalid username or password"


@dataclass
class LoginResult:
    token: str
    user: User


class AuthService:
    """Handles registration and login flows."""

    def __init__(self, repository: SQLRepository, tokens: TokenService) -> None:
        self.repository = repository
        self.tokens = tokens
        self._dummy_hash: str | None = None

    # -------------------------------------- helpers --------------------------------------
    def _burn_verify(self, password: str) -> None:
        # Unknown usernames still pay for one hash verification.
        if self._dummy_hash is None:
            self._dummy_hash = hash_password("campus-activity-placeholder")
        verify_password(password, self._dummy_hash)

    # -------------------------------------- sign-up --------------------------------------
    def register(self, username: str, password: str, full_name: str = "", college: str = "") -> User:
        return self.create_user(username, password, full_name, college, role=DEFAULT_ROLE)

    def create_user(
        self,
        username: str,
        password: str,
        full_name: str = "",
        college: str = "",
        *,
        role: Role | str = DEFAULT_ROLE,
    ) -> User:
        name = (username or "").strip()
        if len(name) < MIN_USERNAME_LENGTH or len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"username needs at least {MIN_USERNAME_LENGTH} characters "
                f"and password at least {MIN_PASSWORD_LENGTH}"
            )
        role_value = Role.parse(role)
        if role_value is None:
            raise ValidationError(f"unknown role: {role}")
        password_hash = hash_password(password)
        try:
            user = self.repository.create_user(
                name,
                password_hash,
                (full_name or "").strip(),
                (college or "").strip(),
                role_value.value,
            )
        except DuplicateEntryError as exc:
            raise Conflict("username already exists") from exc
        logger.info("created user %s (%s) with role %s", user.id, user.username, user.role)
        return user

    # -------------------------------------- login --------------------------------------
    def login(self, username: str, password: str) -> LoginResult:
        name = (username or "").strip()
        user = self.repository.get_user_by_username(name) if name else None
        if not user:
            self._burn_verify(password or "")
            logger.warning("login rejected")
            raise Unauthenticated(INVALID_CREDENTIALS)
        if not verify_password(password or "", user.password_hash):
            logger.warning("login rejected for user %s", user.id)
            raise Unauthenticated(INVALID_CREDENTIALS)
        if needs_rehash(user.password_hash):
            new_hash = hash_password(password)
            self.repository.update_user_password(user.id, new_hash)
            user.password_hash = new_hash
        token = self.tokens.issue(user.id, user.username, user.role)
        return LoginResult(token=token, user=user)
