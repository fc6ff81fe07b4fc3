"""Application factory: wires settings, store, services and routers together."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from campus_api.core.config import Settings, get_settings
from campus_api.core.errors import install_error_handlers
from campus_api.core.logging_config import configure_logging
from campus_api.db.session import Database
from campus_api.repositories.sql_repository import SQLRepository
from campus_api.routers import activities as activities_router
from campus_api.routers import admin as admin_router
from campus_api.routers import auth as auth_router
from campus_api.routers import registrations as registrations_router
from campus_api.routers import stats as stats_router
from campus_api.services.activity_service import ActivityService
from campus_api.services.auth_gate import AuthGate
from campus_api.services.auth_service import AuthService
from campus_api.services.registration_service import RegistrationService
from campus_api.services.stats_service import StatsService
from campus_api.services.token_service import TokenService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, nosniff, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Factory compatible with ``uvicorn --factory campus_api.app:create_app``."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    database = database or Database(
        settings.database_url,
        pool_size=settings.db_pool_size,
        pool_recycle=settings.db_pool_recycle_seconds,
    )
    if settings.auto_create_tables:
        database.create_all()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("campus activity API started (env=%s)", settings.app_env)
        yield
        database.dispose()

    app = FastAPI(title="Campus Activity API", lifespan=lifespan)

    repository = SQLRepository(database)
    tokens = TokenService(settings.jwt_secret, ttl_seconds=settings.token_ttl_seconds)
    app.state.settings = settings
    app.state.database = database
    app.state.auth_gate = AuthGate(tokens)
    app.state.auth_service = AuthService(repository, tokens)
    app.state.activity_service = ActivityService(repository)
    app.state.registration_service = RegistrationService(repository, settings.admin_status_targets)
    app.state.stats_service = StatsService(repository)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["Origin", "Content-Type", "Authorization"],
            expose_headers=["Authorization"],
            max_age=12 * 60 * 60,
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.is_prod)
    install_error_handlers(app)

    app.include_router(auth_router.router)
    app.include_router(activities_router.router)
    app.include_router(registrations_router.router)
    app.include_router(stats_router.router)
    app.include_router(admin_router.router)

    @app.get("/healthz", include_in_schema=False)
    def healthz():
        return {"ok": True}

    return app
