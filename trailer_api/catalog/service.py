"""Catalog service for trailer operations.

High-level service that combines repository operations with
business logic for catalog management: slug derivation, the stock
invariant and identifier resolution.
"""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from trailer_api.catalog.filters import PaginatedResult, PaginationParams, TrailerFilter
from trailer_api.catalog.models import Trailer
from trailer_api.catalog.repository import TrailerRepository
from trailer_api.catalog.slug import generate_unique_slug
from trailer_api.domain.exceptions import InvalidIdentifierError, TrailerNotFoundError
from trailer_api.domain.value_objects import Category, TrailerRef
from trailer_api.infrastructure.config import settings

logger = structlog.get_logger()


class CatalogService:
    """Service for trailer catalog operations.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session)
            trailer = await service.create_trailer({"name": "Причіп ПЛ-2", ...})
            page = await service.list_trailers(
                TrailerFilter(brand="кремень"),
                PaginationParams(page=1, limit=10),
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.repository = TrailerRepository(session)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_trailers(
        self,
        filters: TrailerFilter,
        pagination: PaginationParams,
    ) -> PaginatedResult[Trailer]:
        """List trailers with filters and pagination.

        Args:
            filters: Filter parameters.
            pagination: Pagination parameters.

        Returns:
            Paginated trailer results.
        """
        trailers = await self.repository.find_all(filters, pagination)
        total = await self.repository.count(filters)

        return PaginatedResult(
            items=list(trailers),
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )

    async def get_trailer(self, identifier: str) -> Trailer:
        """Get a trailer by store key or slug.

        Args:
            identifier: Trailer ID or slug.

        Returns:
            The trailer.

        Raises:
            InvalidIdentifierError: If the identifier is neither form.
            TrailerNotFoundError: If nothing matches.
        """
        ref = TrailerRef.parse(identifier)
        if ref is None:
            raise InvalidIdentifierError(identifier)

        trailer = None
        if ref.is_key:
            trailer = await self.repository.get_by_id(str(ref.key))
        if trailer is None:
            trailer = await self.repository.get_by_slug(ref.value.lower())
        if trailer is None:
            raise TrailerNotFoundError(identifier)
        return trailer

    async def get_featured(self, limit: int = 10) -> list[Trailer]:
        """Get featured in-stock trailers, newest first.

        Args:
            limit: Maximum results.

        Returns:
            Featured trailers.
        """
        return list(await self.repository.find_featured(limit))

    async def search(self, query: str, limit: int = 10) -> list[Trailer]:
        """Search trailers by text.

        Args:
            query: Search text, already trimmed.
            limit: Maximum results.

        Returns:
            Matching trailers.
        """
        return list(await self.repository.search(query, limit))

    async def get_categories(self) -> list[dict[str, Any]]:
        """Get every category with its in-stock count.

        Returns:
            List of ``{"name", "count"}`` in catalog order.
        """
        counts = await self.repository.count_in_stock_by(Trailer.category)
        return [{"name": name, "count": counts.get(name, 0)} for name in Category.names()]

    async def get_brands(self) -> list[dict[str, Any]]:
        """Get every brand with its in-stock count.

        Returns:
            List of ``{"name", "count"}`` sorted by brand.
        """
        brands = await self.repository.get_brands()
        counts = await self.repository.count_in_stock_by(Trailer.brand)
        return [{"name": brand, "count": counts.get(brand, 0)} for brand in brands]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create_trailer(self, data: dict[str, Any]) -> Trailer:
        """Create a trailer.

        The slug comes from ``data["slug"]`` when given, otherwise from
        the name, and is suffixed until unique.

        Args:
            data: Validated column values.

        Returns:
            Created trailer.
        """
        fields = dict(data)
        quantity = fields.pop("quantity", 0)
        in_stock = fields.pop("in_stock", None)

        fields["slug"] = await self._unique_slug(fields.get("slug") or fields["name"])

        trailer = Trailer(**fields)
        trailer.apply_stock(quantity, in_stock)
        await self.repository.save(trailer)

        logger.info("Trailer created", trailer_id=trailer.id, slug=trailer.slug)
        return trailer

    async def update_trailer(self, identifier: str, changes: dict[str, Any]) -> Trailer:
        """Apply a partial update.

        A new name without an explicit slug regenerates the slug.

        Args:
            identifier: Trailer ID or slug.
            changes: Validated column values to change.

        Returns:
            Updated trailer.
        """
        trailer = await self.get_trailer(identifier)
        fields = dict(changes)

        slug_source = fields.get("slug") or fields.get("name")
        if slug_source:
            fields["slug"] = await self._unique_slug(slug_source, exclude_id=trailer.id)
        else:
            fields.pop("slug", None)

        trailer.apply_changes(fields)
        await self.repository.save(trailer)

        logger.info("Trailer updated", trailer_id=trailer.id, fields=sorted(fields))
        return trailer

    async def update_stock(self, identifier: str, quantity: int) -> Trailer:
        """Set stock quantity; availability follows the quantity.

        Args:
            identifier: Trailer ID or slug.
            quantity: New quantity.

        Returns:
            Updated trailer.
        """
        trailer = await self.get_trailer(identifier)
        trailer.apply_stock(quantity)
        await self.repository.save(trailer)

        logger.info(
            "Stock updated",
            trailer_id=trailer.id,
            quantity=trailer.quantity,
            in_stock=trailer.in_stock,
        )
        return trailer

    async def delete_trailer(self, identifier: str) -> None:
        """Delete a trailer permanently.

        Args:
            identifier: Trailer ID or slug.
        """
        trailer = await self.get_trailer(identifier)
        await self.repository.delete(trailer)
        logger.info("Trailer deleted", trailer_id=trailer.id, slug=trailer.slug)

    async def seed_catalog(
        self,
        records: list[dict[str, Any]],
        clear_existing: bool = True,
    ) -> dict[str, Any]:
        """Seed the catalog with sample trailers.

        Args:
            records: Trailer data in column form.
            clear_existing: Whether to delete existing trailers first.

        Returns:
            Seeding result with counts.
        """
        deleted = 0
        if clear_existing:
            deleted = await self.repository.delete_all()

        created = [await self.create_trailer(record) for record in records]
        await self.session.commit()

        return {
            "deleted": deleted,
            "trailers_created": len(created),
            "categories_used": len({t.category for t in created}),
            "brands_used": len({t.brand for t in created}),
        }

    async def _unique_slug(self, text: str, exclude_id: str | None = None) -> str:
        return await generate_unique_slug(
            text,
            self.repository.slug_exists,
            exclude_id=exclude_id,
            max_attempts=settings.slug_max_attempts,
        )
