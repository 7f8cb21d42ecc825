# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application error types and the FastAPI handlers that render them.

Every error leaves the API in the same envelope::

    {"status": "error", "message": "...", "errors": [{field, message, value}]}
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException

from src.config import settings

logger = logging.getLogger(__name__)


class DuplicateKeyError(Exception):
    """Raised by a storage backend when a unique key already exists."""

    def __init__(self, field: str, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(f"Duplicate value for {field}")


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permission"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppError):
    """Duplicate unique key. Reported as a client error, never a 5xx."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Duplicate value"


class AlreadySubscribedError(ConflictError):
    default_message = "Email is already subscribed to our newsletter"


class UploadError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "File upload failed"


class InternalError(AppError):
    default_message = "Internal server error"


def error_item(field: str, message: str, value: Any = None) -> dict[str, Any]:
    """Build one itemized error entry."""
    return {"field": field, "message": message, "value": value}


def error_response(
    status_code: int,
    message: str,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"status": "error", "message": message}
    if errors:
        content["errors"] = jsonable_encoder(errors)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _request_validation_items(exc: RequestValidationError) -> list[dict[str, Any]]:
    items = []
    for err in exc.errors():
        # First loc entry is the source ("body", "query", "path", ...)
        loc = [str(part) for part in err.get("loc", ())[1:]]
        items.append(
            error_item(
                ".".join(loc) or "request",
                err.get("msg", "Invalid value"),
                err.get("input"),
            )
        )
    return items


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "%s on %s %s: %s",
                type(exc).__name__,
                request.method,
                request.url.path,
                exc.message,
            )
        return error_response(exc.status_code, exc.message, exc.errors)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            ValidationError.default_message,
            _request_validation_items(exc),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        return error_response(
            exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(
        request: Request, exc: DuplicateKeyError
    ) -> JSONResponse:
        return error_response(
            ConflictError.status_code,
            f"Duplicate value for {exc.field}",
            [error_item(exc.field, "Value already exists", exc.value)],
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(
        request: Request, exc: IntegrityError
    ) -> JSONResponse:
        logger.warning("Integrity error on %s: %s", request.url.path, exc.orig)
        return error_response(ConflictError.status_code, ConflictError.default_message)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "Unhandled exception on %s %s", request.method, request.url.path
        )
        message = InternalError.default_message
        if settings.debug:
            message = f"{type(exc).__name__}: {exc}"
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)
