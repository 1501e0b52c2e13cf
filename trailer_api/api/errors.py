"""Centralized error translation.

Maps tagged catalog errors, request validation failures and routing
errors to the error envelope. Unexpected exceptions are caught by
``ErrorHandlerMiddleware``.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from trailer_api.api.responses import error_response
from trailer_api.domain.exceptions import (
    ErrorKind,
    MalformedBodyError,
    TrailerStoreError,
    ValidationFailedError,
)

logger = structlog.get_logger()

# Location prefixes FastAPI adds to validation error paths
REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def format_location(loc: tuple[Any, ...] | list[Any]) -> str | None:
    """Render a validation error location as a field path.

    ``("body", "specifications", 0, "name")`` becomes
    ``"specifications[0].name"``.

    Args:
        loc: Pydantic error location.

    Returns:
        Field path, or None for whole-body errors.
    """
    parts = list(loc)
    if parts and parts[0] in REQUEST_LOCATIONS:
        parts = parts[1:]

    path = ""
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or None


def validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Convert pydantic errors to field error details.

    Args:
        exc: Request validation error.

    Returns:
        List of ``{"field", "message", "value"}``.
    """
    details = []
    for error in exc.errors():
        message = error.get("msg", "Invalid value")
        # Pydantic prefixes messages raised from custom validators
        message = message.removeprefix("Value error, ")
        details.append(
            {
                "field": format_location(error.get("loc", ())),
                "message": message,
                "value": None if error.get("type") == "missing" else error.get("input"),
            }
        )
    return details


async def trailer_store_error_handler(request: Request, exc: TrailerStoreError) -> JSONResponse:
    """Handle tagged catalog errors by kind."""
    status_code = exc.status_code

    if exc.kind is ErrorKind.INTERNAL or status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "Request failed",
            path=request.url.path,
            method=request.method,
            kind=exc.kind.value,
            error=exc.message,
            details=exc.details,
        )
    else:
        logger.info(
            "Request rejected",
            path=request.url.path,
            method=request.method,
            kind=exc.kind.value,
            error=exc.message,
            details=exc.details,
        )

    return error_response(exc.message, status_code, errors=exc.errors)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle body/query validation failures."""
    if any(error.get("type") == "json_invalid" for error in exc.errors()):
        return await trailer_store_error_handler(request, MalformedBodyError())

    return await trailer_store_error_handler(request, ValidationFailedError(validation_errors(exc)))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle routing and framework HTTP errors with the envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Route not found" if exc.detail == "Not Found" else str(exc.detail)
    else:
        message = str(exc.detail)

    return error_response(message, exc.status_code, headers=getattr(exc, "headers", None))


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(TrailerStoreError, trailer_store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
