"""Error taxonomy shared by services and the HTTP layer."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

INTERNAL_MESSAGE = "internal server error"


class CampusError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    default_code = "error"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class ValidationError(CampusError):
    status_code = 400
    default_code = "validation_error"


class Unauthenticated(CampusError):
    status_code = 401
    default_code = "unauthenticated"


class Forbidden(CampusError):
    status_code = 403
    default_code = "forbidden"


class NotFound(CampusError):
    status_code = 404
    default_code = "not_found"


class Conflict(CampusError):
    status_code = 409
    default_code = "conflict"


class InternalError(CampusError):
    status_code = 500
    default_code = "internal_error"


def _error_response(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse({"error": message, "code": code}, status_code=status_code)


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CampusError)
    async def campus_error_handler(request: Request, exc: CampusError):
        if isinstance(exc, InternalError):
            logger.error("internal error on %s %s: %s", request.method, request.url.path, exc.message)
            return _error_response(exc.status_code, INTERNAL_MESSAGE, exc.code)
        return _error_response(exc.status_code, exc.message, exc.code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query"))
        detail = first.get("msg", "invalid request")
        message = f"{field}: {detail}" if field else detail
        return _error_response(400, message, ValidationError.default_code)

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            "store failure on %s %s",
            request.method,
            request.url.path,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return _error_response(500, INTERNAL_MESSAGE, InternalError.default_code)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "unhandled error on %s %s",
            request.method,
            request.url.path,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return _error_response(500, INTERNAL_MESSAGE, InternalError.default_code)
