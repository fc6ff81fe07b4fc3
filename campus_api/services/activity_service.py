"""Activity use cases (create, lookup, filtering, deletion)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from campus_api.core.errors import NotFound, ValidationError
from campus_api.core.utils import as_utc
from campus_api.db.models import Activity
from campus_api.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)


@dataclass
class ActivityDetail:
    activity: Activity
    registered_count: int


class ActivityService:
    def __init__(self, repository: SQLRepository) -> None:
        self.repository = repository

    def create(
        self,
        created_by_id: int,
        *,
        title: str,
        start_time: datetime,
        end_time: datetime,
        description: str = "",
        category: str = "",
        organizer: str = "",
        location: str = "",
        capacity: int = 0,
    ) -> Activity:
        title_value = (title or "").strip()
        if not title_value:
            raise ValidationError("title must not be empty")
        if start_time is None or end_time is None:
            raise ValidationError("startTime and endTime are required")
        start = as_utc(start_time)
        end = as_utc(end_time)
        if end < start:
            raise ValidationError("endTime must not be earlier than startTime")
        if capacity is None or capacity < 0:
            raise ValidationError("capacity must be zero or greater")
        activity = self.repository.create_activity(
            title=title_value,
            description=(description or "").strip(),
            category=(category or "").strip(),
            organizer=(organizer or "").strip(),
            location=(location or "").strip(),
            start_time=start,
            end_time=end,
            capacity=int(capacity),
            created_by_id=created_by_id,
        )
        logger.info("activity %s created by user %s", activity.id, created_by_id)
        return activity

    def get(self, activity_id: int) -> ActivityDetail:
        activity = self.repository.get_activity(activity_id)
        if not activity:
            raise NotFound("activity not found")
        return ActivityDetail(activity=activity, registered_count=self.repository.count_registrations(activity_id))

    def list(self, category: str | None = None, search: str | None = None) -> list[Activity]:
        return self.repository.list_activities(
            category=(category or "").strip() or None,
            search=(search or "").strip() or None,
        )

    def delete(self, activity_id: int) -> None:
        if not self.repository.delete_activity(activity_id):
            raise NotFound("activity not found")
        logger.info("activity %s deleted", activity_id)
