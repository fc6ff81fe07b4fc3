"""Security helpers (hashing and verification)."""

from __future__ import annotations

from argon2 import PasswordHasher, exceptions as argon_exc

from campus_api.core.errors import InternalError

_ph = PasswordHasher()


class HashingError(InternalError):
    """The hashing primitive itself failed."""


def hash_password(password: str) -> str:
    """Create a salted Argon2id hash."""
    try:
        return _ph.hash(password)
    except argon_exc.HashingError as exc:
        raise HashingError("password hashing failed") from exc


def verify_password(password: str, stored_hash: str | None) -> bool:
    stored = stored_hash or ""
    if not stored:
        return False
    try:
        return _ph.verify(stored, password)
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False


def needs_rehash(stored_hash: str) -> bool:
    """True when the hash was produced with weaker parameters than the current hasher."""
    try:
        return _ph.check_needs_rehash(stored_hash)
    except argon_exc.InvalidHashError:
        return True
