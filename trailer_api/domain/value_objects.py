"""Catalog value objects.

Closed enumerations for categories and currencies, the price range used
by listing filters, and the parsed form of a trailer path identifier.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID

from trailer_api.domain.base import ValueObject


# ============================================================================
# Closed Enumerations
# ============================================================================


class Category(str, Enum):
    """Trailer categories offered by the store."""

    PASSENGER = "Легкові причепи"
    CARGO = "Вантажні причепи"
    SPECIAL = "Спеціальні причепи"
    CONSTRUCTION = "Будівельні причепи"
    BOAT = "Причепи для човнів"

    @classmethod
    def names(cls) -> list[str]:
        """Get category display names in catalog order.

        Returns:
            List of category names.
        """
        return [category.value for category in cls]


class Currency(str, Enum):
    """Supported price currencies."""

    UAH = "UAH"
    USD = "USD"
    EUR = "EUR"


# ============================================================================
# Price Range
# ============================================================================


@dataclass(frozen=True)
class PriceRange(ValueObject):
    """Inclusive price bounds; either side may be open.

    Attributes:
        min_price: Lower bound or None.
        max_price: Upper bound or None.
    """

    min_price: float | None = None
    max_price: float | None = None


# ============================================================================
# Identifiers
# ============================================================================


SLUG_IDENTIFIER_PATTERN = re.compile(r"^[a-z0-9-]+$", re.IGNORECASE)


@dataclass(frozen=True)
class TrailerRef(ValueObject):
    """Path identifier of a trailer: a store key or a slug.

    Attributes:
        value: Raw identifier from the URL.
        key: Parsed UUID when the identifier is key-shaped.
    """

    value: str
    key: UUID | None = None

    @classmethod
    def parse(cls, value: str) -> Self | None:
        """Parse a path identifier.

        Args:
            value: Raw identifier.

        Returns:
            TrailerRef, or None if the value is neither a UUID nor slug-shaped.
        """
        try:
            return cls(value=value, key=UUID(value))
        except ValueError:
            pass

        if SLUG_IDENTIFIER_PATTERN.match(value):
            return cls(value=value)
        return None

    @property
    def is_key(self) -> bool:
        """Whether the identifier parsed as a store key."""
        return self.key is not None

    def __str__(self) -> str:
        return self.value
