"""
FastAPI routers grouped by domain (auth, activities, registrations, stats, admin).

Each module exposes an APIRouter included by the app factory; services are
read from ``request.app.state``.
"""

from typing import Annotated

from fastapi import Path, Request

# Largest value a signed 64-bit SQL integer column can hold.
MAX_ROW_ID = 2**63 - 1

RowId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


def app_service(request: Request, name: str):
    svc = getattr(getattr(request.app, "state", None), name, None)
    if svc is None:
        raise RuntimeError(f"{name} is not configured")
    return svc
