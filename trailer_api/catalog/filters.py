"""Filter building for trailer queries.

Turns typed filter options into SQLAlchemy predicates, an ordering
clause and a pagination window.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy import String, and_, column, or_, select
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.functions import FunctionElement

from trailer_api.catalog.models import Trailer
from trailer_api.domain.value_objects import Category, PriceRange

T = TypeVar("T")

LIKE_ESCAPE = "\\"

# Public sort keys (camelCase, as sent by clients) and their snake_case aliases
SORT_COLUMNS = {
    "createdAt": Trailer.created_at,
    "created_at": Trailer.created_at,
    "updatedAt": Trailer.updated_at,
    "updated_at": Trailer.updated_at,
    "name": Trailer.name,
    "price": Trailer.price,
    "brand": Trailer.brand,
    "model": Trailer.model,
    "category": Trailer.category,
    "quantity": Trailer.quantity,
    "slug": Trailer.slug,
}

DEFAULT_SORT = "createdAt"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally.

    Args:
        value: Raw search text.

    Returns:
        Escaped text.
    """
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def contains_pattern(value: str) -> str:
    """Build a case-insensitive substring pattern."""
    return f"%{escape_like(value)}%"


class json_array_items(FunctionElement):
    """Table-valued function yielding each element of a JSON array as text.

    Rendered as ``json_array_elements_text`` on PostgreSQL and as
    ``json_each`` elsewhere (SQLite). Both expose the element as a
    ``value`` column.
    """

    name = "json_array_items"
    inherit_cache = True


@compiles(json_array_items)
def _compile_json_each(element: json_array_items, compiler: Any, **kw: Any) -> str:
    return f"json_each({compiler.process(element.clauses, **kw)})"


@compiles(json_array_items, "postgresql")
def _compile_json_array_elements_text(
    element: json_array_items, compiler: Any, **kw: Any
) -> str:
    return f"json_array_elements_text({compiler.process(element.clauses, **kw)})"


def keyword_condition(pattern: str) -> ColumnElement[bool]:
    """Match a LIKE pattern against each stored keyword.

    Args:
        pattern: Escaped LIKE pattern.

    Returns:
        EXISTS predicate correlated to the enclosing trailer row.
    """
    items = json_array_items(Trailer.keywords).table_valued(column("value", String))
    return (
        select(items.c.value)
        .where(items.c.value.ilike(pattern, escape=LIKE_ESCAPE))
        .exists()
    )


def search_condition(query: str) -> ColumnElement[bool]:
    """Match a query against name, brand, model, category and keywords.

    Keywords match element by element, so JSON punctuation in the
    query never matches the list syntax itself.

    Args:
        query: Search text.

    Returns:
        OR predicate over the searchable fields.
    """
    pattern = contains_pattern(query)
    return or_(
        Trailer.name.ilike(pattern, escape=LIKE_ESCAPE),
        Trailer.brand.ilike(pattern, escape=LIKE_ESCAPE),
        Trailer.model.ilike(pattern, escape=LIKE_ESCAPE),
        Trailer.category.ilike(pattern, escape=LIKE_ESCAPE),
        keyword_condition(pattern),
    )


@dataclass
class TrailerFilter:
    """Filter parameters for trailer listing.

    Attributes:
        category: Exact category.
        brand: Case-insensitive brand substring.
        price: Inclusive price range.
        in_stock: Filter by availability.
        is_featured: Filter by featured flag.
        search: Text search across name/brand/model/category/keywords.
    """

    category: Category | None = None
    brand: str | None = None
    price: PriceRange = field(default_factory=PriceRange)
    in_stock: bool | None = None
    is_featured: bool | None = None
    search: str | None = None

    def conditions(self) -> list[ColumnElement[bool]]:
        """Build the list of predicates; they are ANDed by the caller.

        Returns:
            SQLAlchemy boolean expressions.
        """
        conditions: list[ColumnElement[bool]] = []

        if self.category is not None:
            conditions.append(Trailer.category == Category(self.category).value)

        if self.brand:
            conditions.append(Trailer.brand.ilike(contains_pattern(self.brand), escape=LIKE_ESCAPE))

        if self.in_stock is not None:
            conditions.append(Trailer.in_stock == self.in_stock)

        if self.is_featured is not None:
            conditions.append(Trailer.is_featured == self.is_featured)

        if self.price.min_price is not None:
            conditions.append(Trailer.price >= self.price.min_price)

        if self.price.max_price is not None:
            conditions.append(Trailer.price <= self.price.max_price)

        if self.search:
            conditions.append(search_condition(self.search))

        return conditions

    def predicate(self) -> ColumnElement[bool] | None:
        """Combine all conditions with AND.

        Returns:
            Predicate, or None when nothing is filtered.
        """
        conditions = self.conditions()
        if not conditions:
            return None
        return and_(*conditions)


@dataclass
class PaginationParams:
    """Pagination and sorting parameters.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page.
        sort_by: Sort field.
        sort_order: Sort order (asc/desc).
    """

    page: int = 1
    limit: int = 10
    sort_by: str = DEFAULT_SORT
    sort_order: str = "desc"

    @property
    def skip(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.limit

    @property
    def descending(self) -> bool:
        """Whether results are sorted descending."""
        return self.sort_order.lower() == "desc"

    def order_by(self) -> Any:
        """Get the ordering clause.

        Unknown sort fields fall back to creation time.

        Returns:
            SQLAlchemy ordering expression.
        """
        column = SORT_COLUMNS.get(self.sort_by, SORT_COLUMNS[DEFAULT_SORT])
        return column.desc() if self.descending else column.asc()


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count.
        page: Current page.
        limit: Items per page.
    """

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1

    def pagination(self) -> dict[str, Any]:
        """Pagination metadata as sent to clients.

        Returns:
            Dictionary with camelCase keys.
        """
        return {
            "currentPage": self.page,
            "totalPages": self.total_pages,
            "totalItems": self.total,
            "itemsPerPage": self.limit,
            "hasNextPage": self.has_next,
            "hasPrevPage": self.has_prev,
        }
