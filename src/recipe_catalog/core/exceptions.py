"""HTTP error model and exception handlers.

Every error leaves the service as the same JSON envelope::

    {"error": "NOT_FOUND", "message": "...", "details": null, "requestId": "..."}

Endpoints raise the ``AppException`` subclasses below; request validation,
routing errors, lost database connections and unexpected failures are
converted by the handlers registered in ``setup_exception_handlers``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

import asyncpg
from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_catalog.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import Request

logger = get_logger(__name__)

HTTP_422_UNPROCESSABLE = 422

# Failures reaching PostgreSQL, as opposed to errors in a statement.
DATABASE_UNAVAILABLE_ERRORS: tuple[type[Exception], ...] = (
    asyncpg.PostgresConnectionError,
    asyncpg.CannotConnectNowError,
    asyncpg.TooManyConnectionsError,
    asyncpg.InterfaceError,
    ConnectionError,
    TimeoutError,
)


class ErrorDetail(BaseModel):
    """One failed field of a rejected request."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """The error envelope."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = Field(default=None, serialization_alias="requestId")


class AppException(Exception):
    """An error with a fixed HTTP status and error code.

    Subclasses set ``status_code`` and ``error``; instances carry the message.
    """

    status_code: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: ClassVar[str] = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: list[ErrorDetail] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundException(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    error = "NOT_FOUND"

    def __init__(self, resource: str, identifier: Any) -> None:
        super().__init__(f"{resource} with identifier '{identifier}' not found")


class ConflictException(AppException):
    status_code = status.HTTP_409_CONFLICT
    error = "CONFLICT"


class ServiceUnavailableException(AppException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error = "SERVICE_UNAVAILABLE"

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(message)


def _get_request_id(request: Request) -> str | None:
    """Request id assigned by ``RequestIDMiddleware``, if it ran."""
    return getattr(request.state, "request_id", None)


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> ORJSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        details=details,
        request_id=_get_request_id(request),
    )
    return ORJSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


async def _handle_app_exception(request: Request, exc: AppException) -> ORJSONResponse:
    return _error_response(request, exc.status_code, exc.error, exc.message, exc.details)


async def _handle_http_exception(
    request: Request,
    exc: StarletteHTTPException,
) -> ORJSONResponse:
    # Unknown routes and unsupported methods raised by the router itself.
    return _error_response(request, exc.status_code, "HTTP_ERROR", str(exc.detail))


async def _handle_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> ORJSONResponse:
    details = [
        ErrorDetail(
            code="VALIDATION_ERROR",
            message=problem["msg"],
            field=".".join(str(part) for part in problem["loc"]),
        )
        for problem in exc.errors()
    ]
    return _error_response(
        request,
        HTTP_422_UNPROCESSABLE,
        "VALIDATION_ERROR",
        "Request validation failed",
        details,
    )


async def _handle_database_unavailable(request: Request, exc: Exception) -> ORJSONResponse:
    logger.error(
        "Database unavailable",
        error_type=type(exc).__name__,
        error=str(exc),
        path=request.url.path,
    )
    return _error_response(
        request,
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "SERVICE_UNAVAILABLE",
        "Database temporarily unavailable",
    )


async def _handle_unexpected(request: Request, exc: Exception) -> ORJSONResponse:
    logger.opt(exception=exc).error("Unhandled exception", path=request.url.path)
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that render every failure as an ``ErrorResponse``."""
    app.add_exception_handler(AppException, _handle_app_exception)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    for error_type in DATABASE_UNAVAILABLE_ERRORS:
        app.add_exception_handler(error_type, _handle_database_unavailable)
    app.add_exception_handler(Exception, _handle_unexpected)
