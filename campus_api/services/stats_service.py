"""Read-only reporting over activities and registrations."""

from __future__ import annotations

from campus_api.core.errors import ValidationError
from campus_api.repositories.sql_repository import SQLRepository

DEFAULT_HOT_LIMIT = 5
MAX_HOT_LIMIT = 50


class StatsService:
    def __init__(self, repository: SQLRepository) -> None:
        self.repository = repository

    def hot_activities(self, limit: int = DEFAULT_HOT_LIMIT) -> list[dict]:
        """Activities ranked by registration count; activities nobody joined count as 0."""
        if limit < 1 or limit > MAX_HOT_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_HOT_LIMIT}")
        return self.repository.hot_activities(limit)

    def organizer_counts(self) -> list[dict]:
        return self.repository.organizer_counts()
