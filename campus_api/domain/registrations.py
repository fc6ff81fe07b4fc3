"""Domain helpers for registration status values."""
from __future__ import annotations

from enum import Enum
from typing import Iterable


class RegistrationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


INITIAL_STATUS = RegistrationStatus.PENDING


def parse_status(value: str | None) -> RegistrationStatus | None:
    """Return the status matching ``value`` (case-insensitive) or None."""
    candidate = (value or "").strip().lower()
    try:
        return RegistrationStatus(candidate)
    except ValueError:
        return None


def admin_targets(configured: Iterable[str] | None) -> frozenset[RegistrationStatus]:
    """Resolve the configured set of statuses an administrator may assign.

    Unknown names are ignored; an empty configuration means every status.
    """
    targets = {status for status in (parse_status(v) for v in (configured or ())) if status}
    return frozenset(targets or RegistrationStatus)
