from __future__ import annotations

from fastapi import APIRouter, Request

from campus_api.routers import app_service
from campus_api.schemas import HotActivityOut, OrganizerCountOut
from campus_api.services.stats_service import DEFAULT_HOT_LIMIT, StatsService

router = APIRouter(prefix="/api/stats", tags=["stats"])


def _stats(request: Request) -> StatsService:
    return app_service(request, "stats_service")


@router.get("/hot-activities", response_model=list[HotActivityOut])
def hot_activities(request: Request, limit: int = DEFAULT_HOT_LIMIT):
    return _stats(request).hot_activities(limit)


@router.get("/organizer-activity-counts", response_model=list[OrganizerCountOut])
def organizer_activity_counts(request: Request):
    return _stats(request).organizer_counts()
