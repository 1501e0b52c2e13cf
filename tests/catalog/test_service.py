"""Tests for the catalog service against an in-memory database."""

import pytest
from sqlalchemy.exc import IntegrityError

from tests.factories import trailer_fields
from trailer_api.catalog.filters import PaginationParams, TrailerFilter
from trailer_api.catalog.repository import TrailerRepository, is_slug_conflict
from trailer_api.catalog.models import Trailer
from trailer_api.catalog.service import CatalogService
from trailer_api.domain.exceptions import (
    DuplicateKeyError,
    InvalidIdentifierError,
    TrailerNotFoundError,
)
from trailer_api.domain.value_objects import Category, PriceRange


class TestCreateTrailer:
    """Tests for trailer creation."""

    @pytest.mark.asyncio
    async def test_slug_derived_from_name(self, service: CatalogService) -> None:
        """The slug is generated from the name."""
        trailer = await service.create_trailer(trailer_fields(name="Причіп Кремень"))
        assert trailer.slug == "prychip-kremen"
        assert trailer.id is not None

    @pytest.mark.asyncio
    async def test_explicit_slug_normalized(self, service: CatalogService) -> None:
        """An explicit slug is normalized like a name."""
        trailer = await service.create_trailer(trailer_fields(slug="My Custom Slug"))
        assert trailer.slug == "my-custom-slug"

    @pytest.mark.asyncio
    async def test_same_name_gets_distinct_slugs(self, service: CatalogService) -> None:
        """Colliding names receive counter suffixes."""
        first = await service.create_trailer(trailer_fields(name="Acme Cargo"))
        second = await service.create_trailer(trailer_fields(name="Acme Cargo"))
        third = await service.create_trailer(trailer_fields(name="Acme Cargo"))
        assert [first.slug, second.slug, third.slug] == [
            "acme-cargo",
            "acme-cargo-1",
            "acme-cargo-2",
        ]

    @pytest.mark.asyncio
    async def test_zero_quantity_out_of_stock(self, service: CatalogService) -> None:
        """Empty stock is stored as unavailable."""
        trailer = await service.create_trailer(trailer_fields(quantity=0, in_stock=True))
        assert trailer.in_stock is False

    @pytest.mark.asyncio
    async def test_defaults_applied(self, service: CatalogService) -> None:
        """Timestamps are set on creation."""
        trailer = await service.create_trailer(trailer_fields())
        assert trailer.in_stock is True
        assert trailer.created_at is not None
        assert trailer.updated_at is not None


class TestGetTrailer:
    """Tests for identifier resolution."""

    @pytest.mark.asyncio
    async def test_by_id_and_slug(self, service: CatalogService) -> None:
        """A trailer is found by ID and by slug."""
        created = await service.create_trailer(trailer_fields(name="Acme Cargo"))

        assert (await service.get_trailer(created.id)).id == created.id
        assert (await service.get_trailer("acme-cargo")).id == created.id

    @pytest.mark.asyncio
    async def test_slug_lookup_case_insensitive(self, service: CatalogService) -> None:
        """Uppercase slugs resolve to the stored lowercase slug."""
        created = await service.create_trailer(trailer_fields(name="Acme Cargo"))
        assert (await service.get_trailer("ACME-Cargo")).id == created.id

    @pytest.mark.asyncio
    async def test_invalid_identifier(self, service: CatalogService) -> None:
        """Identifiers with illegal characters are rejected."""
        with pytest.raises(InvalidIdentifierError):
            await service.get_trailer("bad id!")

    @pytest.mark.asyncio
    async def test_missing_key(self, service: CatalogService) -> None:
        """A well-formed but unknown ID is not found."""
        with pytest.raises(TrailerNotFoundError):
            await service.get_trailer("3f8b2c1e-9d4a-4f6b-8e2d-1a2b3c4d5e6f")


class TestUpdateTrailer:
    """Tests for partial updates."""

    @pytest.mark.asyncio
    async def test_rename_regenerates_slug(self, service: CatalogService) -> None:
        """A new name produces a new slug."""
        created = await service.create_trailer(trailer_fields(name="Acme Cargo"))
        updated = await service.update_trailer(created.id, {"name": "Acme Boat"})
        assert updated.slug == "acme-boat"

    @pytest.mark.asyncio
    async def test_rename_keeps_own_slug(self, service: CatalogService) -> None:
        """Renaming to the same slug does not add a suffix."""
        created = await service.create_trailer(trailer_fields(name="Acme Cargo"))
        updated = await service.update_trailer(created.id, {"name": "ACME cargo"})
        assert updated.slug == "acme-cargo"

    @pytest.mark.asyncio
    async def test_rename_onto_taken_slug(self, service: CatalogService) -> None:
        """Renaming onto another trailer's slug adds a suffix."""
        await service.create_trailer(trailer_fields(name="Acme Boat"))
        created = await service.create_trailer(trailer_fields(name="Acme Cargo"))
        updated = await service.update_trailer(created.id, {"name": "Acme Boat"})
        assert updated.slug == "acme-boat-1"

    @pytest.mark.asyncio
    async def test_untouched_fields_kept(self, service: CatalogService) -> None:
        """Fields not in the update remain unchanged."""
        created = await service.create_trailer(trailer_fields(brand="Acme", price=1000.0))
        updated = await service.update_trailer(created.id, {"price": 1200.0})
        assert updated.price == 1200.0
        assert updated.brand == "Acme"
        assert updated.slug == created.slug

    @pytest.mark.asyncio
    async def test_quantity_zero_sets_out_of_stock(self, service: CatalogService) -> None:
        """Updating quantity to zero clears availability."""
        created = await service.create_trailer(trailer_fields(quantity=3))
        updated = await service.update_trailer(created.id, {"quantity": 0})
        assert updated.in_stock is False


class TestStockAndDelete:
    """Tests for stock updates and deletion."""

    @pytest.mark.asyncio
    async def test_update_stock(self, service: CatalogService) -> None:
        """Availability follows the new quantity."""
        created = await service.create_trailer(trailer_fields(quantity=3))

        emptied = await service.update_stock(created.slug, 0)
        assert (emptied.quantity, emptied.in_stock) == (0, False)

        restocked = await service.update_stock(created.slug, 7)
        assert (restocked.quantity, restocked.in_stock) == (7, True)

    @pytest.mark.asyncio
    async def test_delete(self, service: CatalogService) -> None:
        """Deleted trailers can no longer be found."""
        created = await service.create_trailer(trailer_fields())
        await service.delete_trailer(created.id)

        with pytest.raises(TrailerNotFoundError):
            await service.get_trailer(created.id)

    @pytest.mark.asyncio
    async def test_delete_missing(self, service: CatalogService) -> None:
        """Deleting an unknown trailer is not found."""
        with pytest.raises(TrailerNotFoundError):
            await service.delete_trailer("no-such-trailer")


class TestQueries:
    """Tests for listing, search and aggregates."""

    @pytest.mark.asyncio
    async def test_list_with_filters(self, service: CatalogService) -> None:
        """Filters narrow the result and the total."""
        await service.create_trailer(trailer_fields(name="Cheap", price=500.0))
        await service.create_trailer(trailer_fields(name="Mid", price=1500.0))
        await service.create_trailer(
            trailer_fields(name="Boat", price=2500.0, category=Category.BOAT.value)
        )

        result = await service.list_trailers(
            TrailerFilter(price=PriceRange(min_price=1000)),
            PaginationParams(sort_by="price", sort_order="asc"),
        )
        assert [t.name for t in result.items] == ["Mid", "Boat"]
        assert result.total == 2

        result = await service.list_trailers(
            TrailerFilter(category=Category.BOAT),
            PaginationParams(),
        )
        assert [t.name for t in result.items] == ["Boat"]

    @pytest.mark.asyncio
    async def test_pagination_window(self, service: CatalogService) -> None:
        """Pages slice the ordered result."""
        for index in range(5):
            await service.create_trailer(trailer_fields(name=f"Trailer {index}", price=100.0 * index))

        result = await service.list_trailers(
            TrailerFilter(),
            PaginationParams(page=2, limit=2, sort_by="price", sort_order="asc"),
        )
        assert [t.name for t in result.items] == ["Trailer 2", "Trailer 3"]
        assert result.total == 5
        assert result.total_pages == 3

    @pytest.mark.asyncio
    async def test_search_matches_keywords(self, service: CatalogService) -> None:
        """Search looks into keywords as well as names."""
        await service.create_trailer(trailer_fields(name="Plain", keywords=["tow-hitch"]))
        await service.create_trailer(trailer_fields(name="Other"))

        results = await service.search("tow-hitch")
        assert [t.name for t in results] == ["Plain"]

    @pytest.mark.asyncio
    async def test_search_wildcards_literal(self, service: CatalogService) -> None:
        """LIKE wildcards in the query match literally."""
        await service.create_trailer(trailer_fields(name="Plain"))
        assert await service.search("%") == []

    @pytest.mark.asyncio
    async def test_featured_only_in_stock(self, service: CatalogService) -> None:
        """Featured list excludes out-of-stock trailers."""
        await service.create_trailer(trailer_fields(name="Shown", is_featured=True))
        await service.create_trailer(trailer_fields(name="Empty", is_featured=True, quantity=0))
        await service.create_trailer(trailer_fields(name="Regular"))

        featured = await service.get_featured()
        assert [t.name for t in featured] == ["Shown"]

    @pytest.mark.asyncio
    async def test_categories_list_every_category(self, service: CatalogService) -> None:
        """All categories are listed, counting in-stock trailers only."""
        await service.create_trailer(trailer_fields(category=Category.CARGO.value))
        await service.create_trailer(trailer_fields(category=Category.CARGO.value, quantity=0))

        categories = await service.get_categories()
        assert [c["name"] for c in categories] == Category.names()
        counts = {c["name"]: c["count"] for c in categories}
        assert counts[Category.CARGO.value] == 1
        assert counts[Category.BOAT.value] == 0

    @pytest.mark.asyncio
    async def test_brands_sorted_with_counts(self, service: CatalogService) -> None:
        """Brands are distinct and sorted, with in-stock counts."""
        await service.create_trailer(trailer_fields(brand="Zeta"))
        await service.create_trailer(trailer_fields(brand="Acme"))
        await service.create_trailer(trailer_fields(brand="Acme", quantity=0))

        assert await service.get_brands() == [
            {"name": "Acme", "count": 1},
            {"name": "Zeta", "count": 1},
        ]


class TestRepository:
    """Tests for repository error translation."""

    @pytest.mark.asyncio
    async def test_duplicate_slug_rejected(self, service: CatalogService) -> None:
        """A second row with the same slug is a duplicate key."""
        repository = TrailerRepository(service.session)
        await service.create_trailer(trailer_fields(name="Acme Cargo"))

        fields = trailer_fields(name="Acme Cargo", slug="acme-cargo")
        with pytest.raises(DuplicateKeyError) as exc_info:
            await repository.save(Trailer(**fields))

        assert exc_info.value.message == "slug 'acme-cargo' already exists"

    @pytest.mark.asyncio
    async def test_other_integrity_errors_not_duplicates(self, service: CatalogService) -> None:
        """Violations on other columns are not reported as slug conflicts."""
        repository = TrailerRepository(service.session)

        with pytest.raises(IntegrityError) as exc_info:
            await repository.save(Trailer(**trailer_fields(name=None, slug="no-name")))

        assert not isinstance(exc_info.value, DuplicateKeyError)
        assert not is_slug_conflict(exc_info.value)

    @pytest.mark.parametrize(
        ("driver_message", "expected"),
        [
            ("UNIQUE constraint failed: trailers.slug", True),
            ('duplicate key value violates unique constraint "uq_trailers_slug"', True),
            ('duplicate key value violates unique constraint "trailers_pkey"', False),
            ("NOT NULL constraint failed: trailers.slug", False),
        ],
    )
    def test_slug_conflict_detection(self, driver_message: str, expected: bool) -> None:
        """Only unique violations on the slug count as slug conflicts."""
        error = IntegrityError("INSERT INTO trailers", {}, Exception(driver_message))
        assert is_slug_conflict(error) is expected


class TestSeedCatalog:
    """Tests for catalog seeding."""

    @pytest.mark.asyncio
    async def test_seed_replaces_catalog(self, service: CatalogService) -> None:
        """Seeding clears existing trailers and reports counts."""
        await service.create_trailer(trailer_fields(name="Old"))

        result = await service.seed_catalog(
            [
                trailer_fields(name="One", brand="Acme"),
                trailer_fields(name="Two", brand="Zeta", category=Category.BOAT.value),
            ]
        )

        assert result == {
            "deleted": 1,
            "trailers_created": 2,
            "categories_used": 2,
            "brands_used": 2,
        }
        page = await service.list_trailers(TrailerFilter(), PaginationParams())
        assert sorted(t.name for t in page.items) == ["One", "Two"]
