"""Response envelope helpers.

Every endpoint answers with::

    {"success": bool, "message": str, "data"?: any, "errors"?: list,
     "timestamp": "<ISO-8601 UTC>"}
"""

from datetime import datetime, timezone
from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from trailer_api.infrastructure.config import settings

INTERNAL_ERROR_MESSAGE = "Internal server error"


def utc_timestamp() -> str:
    """Current UTC time in ISO-8601 with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_envelope(
    success: bool,
    message: str,
    data: Any = None,
    errors: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build an envelope body.

    ``data`` is omitted when None and ``errors`` when empty.

    Args:
        success: Whether the request succeeded.
        message: Human-readable message.
        data: Optional payload.
        errors: Optional field errors.
        **extra: Additional top-level keys.

    Returns:
        Envelope dictionary.
    """
    body: dict[str, Any] = {"success": success, "message": message}
    if data is not None:
        body["data"] = data
    if errors:
        body["errors"] = errors
    body.update(extra)
    body["timestamp"] = utc_timestamp()
    return body


def success_response(
    data: Any = None,
    message: str = "Success",
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Send a success envelope.

    Args:
        data: Response payload.
        message: Success message.
        status_code: HTTP status code.

    Returns:
        JSON response.
    """
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(build_envelope(True, message, data)),
    )


def error_response(
    message: str = "Error",
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Send an error envelope.

    In production the message of 500 responses is replaced with a
    generic one.

    Args:
        message: Error message.
        status_code: HTTP status code.
        errors: Field-level error details.
        headers: Extra response headers.

    Returns:
        JSON response.
    """
    if settings.is_production and status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        message = INTERNAL_ERROR_MESSAGE

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(build_envelope(False, message, errors=errors)),
        headers=headers,
    )
