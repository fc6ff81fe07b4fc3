"""
Registration lifecycle: sign-up for an activity, admin review and removal.

A registration starts as ``pending``; only administrators move it to
``approved`` or ``rejected`` (or back to ``pending``). Owners may cancel their
own registration and administrators may delete any of them. One registration
per (user, activity) pair is guaranteed by the store's unique constraint.
"""

from __future__ import annotations

import logging
from typing import Iterable

from campus_api.core.errors import Conflict, Forbidden, NotFound, ValidationError
from campus_api.db.models import Registration
from campus_api.domain.registrations import RegistrationStatus, admin_targets, parse_status
from campus_api.domain.roles import Role
from campus_api.repositories.sql_repository import DuplicateEntryError, MissingReferenceError, SQLRepository

logger = logging.getLogger(__name__)


class RegistrationService:
    def __init__(self, repository: SQLRepository, allowed_statuses: Iterable[str] | None = None) -> None:
        self.repository = repository
        self.allowed_statuses = admin_targets(allowed_statuses)

    def register(self, user_id: int, activity_id: int) -> Registration:
        if not self.repository.get_activity(activity_id):
            raise NotFound("activity not found")
        try:
            registration = self.repository.create_registration(user_id, activity_id)
        except DuplicateEntryError as exc:
            raise Conflict("already registered for this activity") from exc
        except MissingReferenceError as exc:
            raise NotFound("user or activity not found") from exc
        logger.info("user %s registered for activity %s (registration %s)", user_id, activity_id, registration.id)
        return registration

    def update_status(self, registration_id: int, new_status: str, acting_role: Role | str) -> Registration:
        if Role.parse(acting_role) is not Role.ADMIN:
            raise Forbidden("admin role required")
        status = parse_status(new_status)
        if status is None or status not in self.allowed_statuses:
            allowed = ", ".join(s.value for s in RegistrationStatus if s in self.allowed_statuses)
            raise ValidationError(f"status must be one of: {allowed}")
        if not self.repository.update_registration_status(registration_id, status.value):
            raise NotFound("registration not found")
        logger.info("registration %s set to %s", registration_id, status.value)
        registration = self.repository.get_registration(registration_id)
        if registration is None:
            # Deleted between the update and the read.
            raise NotFound("registration not found")
        return registration

    def cancel(self, registration_id: int, acting_user_id: int) -> None:
        if self.repository.delete_registration_for_user(registration_id, acting_user_id):
            logger.info("registration %s cancelled by its owner %s", registration_id, acting_user_id)
            return
        if self.repository.get_registration(registration_id) is not None:
            logger.warning("user %s tried to cancel registration %s of another user", acting_user_id, registration_id)
            raise Forbidden("cannot cancel another user's registration")
        raise NotFound("registration not found")

    def admin_delete(self, registration_id: int) -> None:
        if not self.repository.delete_registration(registration_id):
            raise NotFound("registration not found")
        logger.info("registration %s deleted by an administrator", registration_id)

    def list_for_user(self, user_id: int) -> list[dict]:
        return self.repository.list_user_registrations(user_id)

    def list_for_activity(self, activity_id: int) -> list[dict]:
        return self.repository.list_activity_registrations(activity_id)

    def list_all(self) -> list[dict]:
        return self.repository.list_all_registrations()
