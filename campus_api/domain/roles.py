"""User roles."""
from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    ORGANIZER = "organizer"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: object) -> "Role | None":
        """Return the matching role or None for anything outside the enumeration."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


DEFAULT_ROLE = Role.STUDENT
