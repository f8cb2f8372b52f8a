"""Error taxonomy and exception handlers.

Every externally visible failure is rendered as ``{"message": ...}``, with an
optional machine readable ``code`` and, in development only, an ``error``
debug field.

Usage:
    from app.core.errors import NotFoundError, operation_guard

    with operation_guard("Failed to fetch meeting"):
        meeting = store.get(meeting_id)
    if not meeting:
        raise NotFoundError("Meeting not found")
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None) -> None:
        self.message = message or self.__class__.message
        self.code = code
        super().__init__(self.message)

    def to_content(self) -> dict[str, Any]:
        content: dict[str, Any] = {"message": self.message}
        if self.code:
            content["code"] = self.code
        return content


class ValidationError(AppError):
    """Malformed or missing input (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class NotFoundError(AppError):
    """Missing resource (404)."""

    status_code = status.HTTP_404_NOT_FOUND
    message = "Resource not found"


class ConflictError(AppError):
    """Slot already booked (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "This time slot is already booked"


class AuthError(AppError):
    """Missing, invalid or expired credentials (401)."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class InternalError(AppError):
    """Unexpected failure (500)."""


@contextmanager
def operation_guard(message: str) -> Iterator[None]:
    """Convert store failures inside an operation into an ``InternalError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("%s: %s", message, exc)
        raise InternalError(message) from exc


def _with_debug(content: dict[str, Any], exc: BaseException) -> dict[str, Any]:
    if settings.is_development:
        content["error"] = str(exc)
    return content


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s (path=%s)", exc.message, request.url.path)
        content = exc.to_content()
        if exc.__cause__ is not None:
            content = _with_debug(content, exc.__cause__)
    else:
        logger.warning(
            "API error: %s (status=%d, path=%s)",
            exc.message,
            exc.status_code,
            request.url.path,
        )
        content = exc.to_content()
    return JSONResponse(status_code=exc.status_code, content=content)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Request validation failed (path=%s)", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request payload", "errors": jsonable_encoder(exc.errors())},
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded: %s (path=%s)", exc.detail, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"message": f"Rate limit exceeded: {exc.detail}"},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s (path=%s)", exc, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_with_debug({"message": "Internal server error"}, exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, general_exception_handler)
