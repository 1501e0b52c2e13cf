"""Domain layer - value objects and exceptions.

- **Value Objects**: closed enumerations (Category, Currency), PriceRange, TrailerRef
- **Exceptions**: tagged catalog errors carrying an ``ErrorKind``

Example usage:
    from trailer_api.domain import Category, TrailerRef

    ref = TrailerRef.parse("prychip-lehkovyi-kremen-pl-2")
    assert ref is not None and not ref.is_key
"""

from trailer_api.domain.base import ValueObject
from trailer_api.domain.exceptions import (
    STATUS_BY_KIND,
    AuthTokenExpiredError,
    AuthTokenInvalidError,
    DuplicateKeyError,
    ErrorKind,
    InternalError,
    InvalidIdentifierError,
    MalformedBodyError,
    PayloadTooLargeError,
    StoreUnavailableError,
    TrailerNotFoundError,
    TrailerStoreError,
    ValidationFailedError,
)
from trailer_api.domain.value_objects import Category, Currency, PriceRange, TrailerRef

__all__ = [
    # Base
    "ValueObject",
    # Value Objects
    "Category",
    "Currency",
    "PriceRange",
    "TrailerRef",
    # Exceptions
    "STATUS_BY_KIND",
    "AuthTokenExpiredError",
    "AuthTokenInvalidError",
    "DuplicateKeyError",
    "ErrorKind",
    "InternalError",
    "InvalidIdentifierError",
    "MalformedBodyError",
    "PayloadTooLargeError",
    "StoreUnavailableError",
    "TrailerNotFoundError",
    "TrailerStoreError",
    "ValidationFailedError",
]
