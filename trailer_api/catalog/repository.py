"""Trailer repository for database operations.

Provides CRUD operations for trailers with filtering and sorting.
Driver errors are translated into tagged catalog errors here, so
nothing above this layer needs to know about SQLAlchemy exceptions.
"""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

import structlog
from sqlalchemy import and_, delete, func, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from trailer_api.catalog.filters import PaginationParams, TrailerFilter, search_condition
from trailer_api.catalog.models import Trailer
from trailer_api.domain.exceptions import DuplicateKeyError, StoreUnavailableError

logger = structlog.get_logger()


def is_slug_conflict(error: IntegrityError) -> bool:
    """Check whether an integrity error is a duplicate slug.

    PostgreSQL names the violated constraint (``uq_trailers_slug``) and
    SQLite the column (``trailers.slug``), so the driver message is
    matched for both.
    """
    message = str(error.orig).lower()
    return "slug" in message and ("unique" in message or "duplicate" in message)


@asynccontextmanager
async def store_errors(operation: str, trailer: Trailer | None = None) -> AsyncIterator[None]:
    """Translate SQLAlchemy failures into catalog errors.

    Args:
        operation: Operation name for logging.
        trailer: Trailer being written, used to report duplicate values.

    Raises:
        DuplicateKeyError: When the slug is already taken.
        IntegrityError: On any other constraint violation.
        StoreUnavailableError: On connection failures and timeouts.
    """
    try:
        yield
    except IntegrityError as e:
        if not is_slug_conflict(e):
            logger.error("Integrity error", operation=operation, error=str(e.orig))
            raise
        logger.warning("Unique constraint violated", operation=operation, error=str(e.orig))
        value = trailer.slug if trailer is not None else None
        raise DuplicateKeyError("slug", value) from e
    except PoolTimeoutError as e:
        logger.error("Database timeout", operation=operation, error=str(e))
        raise StoreUnavailableError("Database timeout error") from e
    except (OperationalError, InterfaceError) as e:
        logger.error("Database unavailable", operation=operation, error=str(e))
        raise StoreUnavailableError() from e


class TrailerRepository:
    """Repository for Trailer database operations.

    Handles all database interactions for trailers including
    filtering, sorting, and pagination.

    Example usage:
        async with async_session_factory() as session:
            repo = TrailerRepository(session)
            trailers = await repo.find_all(
                TrailerFilter(category=Category.CARGO, in_stock=True),
                PaginationParams(limit=20),
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, trailer: Trailer) -> Trailer:
        """Save a trailer to database.

        Args:
            trailer: Trailer to save.

        Returns:
            Saved trailer.
        """
        async with store_errors("save", trailer):
            self.session.add(trailer)
            await self.session.flush()
        return trailer

    async def delete(self, trailer: Trailer) -> None:
        """Delete a trailer.

        Args:
            trailer: Trailer to delete.
        """
        async with store_errors("delete", trailer):
            await self.session.delete(trailer)
            await self.session.flush()

    async def delete_all(self) -> int:
        """Delete every trailer.

        Returns:
            Number of deleted trailers.
        """
        async with store_errors("delete_all"):
            result = await self.session.execute(delete(Trailer))
            await self.session.flush()
        return result.rowcount or 0

    async def get_by_id(self, trailer_id: str) -> Trailer | None:
        """Get trailer by ID.

        Args:
            trailer_id: Trailer ID.

        Returns:
            Trailer if found, None otherwise.
        """
        return await self._first(Trailer.id == trailer_id)

    async def get_by_slug(self, slug: str) -> Trailer | None:
        """Get trailer by slug.

        Args:
            slug: Trailer slug.

        Returns:
            Trailer if found, None otherwise.
        """
        return await self._first(Trailer.slug == slug)

    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        """Check whether another trailer already uses a slug.

        Args:
            slug: Slug to check.
            exclude_id: Trailer ID to ignore.

        Returns:
            True if the slug is taken.
        """
        query = select(Trailer.id).where(Trailer.slug == slug)
        if exclude_id is not None:
            query = query.where(Trailer.id != exclude_id)

        async with store_errors("slug_exists"):
            result = await self.session.execute(query.limit(1))
        return result.first() is not None

    async def find_all(
        self,
        filters: TrailerFilter,
        pagination: PaginationParams,
    ) -> Sequence[Trailer]:
        """Find trailers with filtering, sorting, and pagination.

        Args:
            filters: Filter parameters.
            pagination: Page window and ordering.

        Returns:
            Sequence of matching trailers.
        """
        query = select(Trailer)

        predicate = filters.predicate()
        if predicate is not None:
            query = query.where(predicate)

        query = (
            query.order_by(pagination.order_by(), Trailer.id)
            .offset(pagination.skip)
            .limit(pagination.limit)
        )

        async with store_errors("find_all"):
            result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self, filters: TrailerFilter) -> int:
        """Count trailers matching filters.

        Args:
            filters: Filter parameters.

        Returns:
            Count of matching trailers.
        """
        query = select(func.count(Trailer.id))

        predicate = filters.predicate()
        if predicate is not None:
            query = query.where(predicate)

        async with store_errors("count"):
            result = await self.session.execute(query)
        return result.scalar_one()

    async def find_featured(self, limit: int = 10) -> Sequence[Trailer]:
        """Get featured trailers that are in stock, newest first.

        Args:
            limit: Maximum results.

        Returns:
            Sequence of featured trailers.
        """
        query = (
            select(Trailer)
            .where(and_(Trailer.is_featured.is_(True), Trailer.in_stock.is_(True)))
            .order_by(Trailer.created_at.desc(), Trailer.id)
            .limit(limit)
        )

        async with store_errors("find_featured"):
            result = await self.session.execute(query)
        return result.scalars().all()

    async def search(self, query_text: str, limit: int = 10) -> Sequence[Trailer]:
        """Search trailers across name, brand, model, category and keywords.

        Args:
            query_text: Search text.
            limit: Maximum results.

        Returns:
            Sequence of matching trailers.
        """
        query = (
            select(Trailer)
            .where(search_condition(query_text))
            .order_by(Trailer.created_at.desc(), Trailer.id)
            .limit(limit)
        )

        async with store_errors("search"):
            result = await self.session.execute(query)
        return result.scalars().all()

    async def count_in_stock_by(self, column: Any) -> dict[str, int]:
        """Count in-stock trailers grouped by a column.

        Args:
            column: Trailer column to group by.

        Returns:
            Mapping of column value to in-stock count.
        """
        query = (
            select(column, func.count(Trailer.id))
            .where(Trailer.in_stock.is_(True))
            .group_by(column)
        )

        async with store_errors("count_in_stock_by"):
            result = await self.session.execute(query)
        return {value: count for value, count in result.all()}

    async def get_brands(self) -> list[str]:
        """Get list of unique brands.

        Returns:
            List of brand names.
        """
        query = select(Trailer.brand).distinct().order_by(Trailer.brand)

        async with store_errors("get_brands"):
            result = await self.session.execute(query)
        return list(result.scalars().all())

    async def _first(self, condition: ColumnElement[bool]) -> Trailer | None:
        async with store_errors("get"):
            result = await self.session.execute(select(Trailer).where(condition))
        return result.scalar_one_or_none()
