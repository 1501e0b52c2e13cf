"""Domain exceptions.

Every error raised by the catalog carries an explicit ``ErrorKind``.
The API layer switches on the kind to choose the HTTP status, so
callers never need to inspect driver-specific error shapes.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Error taxonomy of the trailer catalog."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    DUPLICATE_KEY = "DUPLICATE_KEY"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    NOT_FOUND = "NOT_FOUND"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    MALFORMED_BODY = "MALFORMED_BODY"
    AUTH_TOKEN_INVALID = "AUTH_TOKEN_INVALID"
    AUTH_TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INTERNAL = "INTERNAL"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.DUPLICATE_KEY: 409,
    ErrorKind.INVALID_IDENTIFIER: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PAYLOAD_TOO_LARGE: 413,
    ErrorKind.MALFORMED_BODY: 400,
    ErrorKind.AUTH_TOKEN_INVALID: 401,
    ErrorKind.AUTH_TOKEN_EXPIRED: 401,
    ErrorKind.STORE_UNAVAILABLE: 503,
    ErrorKind.INTERNAL: 500,
}


class TrailerStoreError(Exception):
    """Base class for all catalog exceptions.

    Attributes:
        kind: Tagged error kind.
        message: Human-readable error message.
        errors: Field-level error details, if any.
        details: Additional error context for logging.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            errors: Optional list of field errors.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.errors = errors or []
        self.details = details or {}

    @property
    def status_code(self) -> int:
        """HTTP status code for this error kind."""
        return STATUS_BY_KIND[self.kind]


# ============================================================================
# Request Errors
# ============================================================================


class ValidationFailedError(TrailerStoreError):
    """Raised when request data violates field rules."""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, errors: list[dict[str, Any]], message: str = "Validation failed") -> None:
        super().__init__(message, errors=errors)


class InvalidIdentifierError(TrailerStoreError):
    """Raised when a path identifier is neither a key nor a slug."""

    kind = ErrorKind.INVALID_IDENTIFIER

    def __init__(self, identifier: str) -> None:
        super().__init__("Invalid ID format", details={"identifier": identifier})


class MalformedBodyError(TrailerStoreError):
    """Raised when the request body is not valid JSON."""

    kind = ErrorKind.MALFORMED_BODY

    def __init__(self, message: str = "Invalid JSON format") -> None:
        super().__init__(message)


class PayloadTooLargeError(TrailerStoreError):
    """Raised when the request body exceeds the configured limit."""

    kind = ErrorKind.PAYLOAD_TOO_LARGE

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            "Request payload too large",
            details={"size": size, "limit": limit},
        )


class AuthTokenInvalidError(TrailerStoreError):
    """Raised when a bearer token cannot be decoded."""

    kind = ErrorKind.AUTH_TOKEN_INVALID

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class AuthTokenExpiredError(TrailerStoreError):
    """Raised when a bearer token has expired."""

    kind = ErrorKind.AUTH_TOKEN_EXPIRED

    def __init__(self, message: str = "Token expired") -> None:
        super().__init__(message)


# ============================================================================
# Catalog Errors
# ============================================================================


class TrailerNotFoundError(TrailerStoreError):
    """Raised when no trailer matches the identifier."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, identifier: str) -> None:
        super().__init__("Trailer not found", details={"identifier": identifier})


class DuplicateKeyError(TrailerStoreError):
    """Raised when a unique constraint is violated."""

    kind = ErrorKind.DUPLICATE_KEY

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(
            f"{field} '{value}' already exists",
            details={"field": field, "value": value},
        )


# ============================================================================
# Store Errors
# ============================================================================


class StoreUnavailableError(TrailerStoreError):
    """Raised when the database cannot be reached or times out."""

    kind = ErrorKind.STORE_UNAVAILABLE

    def __init__(self, message: str = "Database connection error") -> None:
        super().__init__(message)


class InternalError(TrailerStoreError):
    """Raised for unexpected failures inside an operation."""

    kind = ErrorKind.INTERNAL
