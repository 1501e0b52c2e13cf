"""Tests for slug generation."""

import pytest

from trailer_api.catalog.slug import (
    DEFAULT_SLUG,
    SLUG_MAX_LENGTH,
    create_slug,
    generate_unique_slug,
    with_suffix,
)
from trailer_api.domain.exceptions import DuplicateKeyError, ErrorKind


def taken(*slugs: str):
    """Build an async existence check over a fixed set of slugs."""
    calls: list[tuple[str, str | None]] = []

    async def slug_exists(slug: str, exclude_id: str | None = None) -> bool:
        calls.append((slug, exclude_id))
        return slug in slugs

    slug_exists.calls = calls  # type: ignore[attr-defined]
    return slug_exists


class TestCreateSlug:
    """Tests for create_slug."""

    def test_transliterates_ukrainian_name(self) -> None:
        """Ukrainian names are transliterated to Latin."""
        assert create_slug("Причіп легковий Кремень ПЛ-2") == "prychip-lehkovyi-kremen-pl-2"

    def test_multi_letter_mappings(self) -> None:
        """Letters map to their multi-letter Latin forms."""
        assert create_slug("Щука") == "shchuka"
        assert create_slug("Юля") == "iulia"
        assert create_slug("Хата") == "khata"
        assert create_slug("Єнот") == "ienot"

    def test_soft_sign_dropped(self) -> None:
        """Soft sign has no Latin counterpart."""
        assert create_slug("Сіль") == "sil"

    def test_latin_text(self) -> None:
        """Latin text is lowercased and hyphenated."""
        assert create_slug("Boat Trailer 500") == "boat-trailer-500"

    def test_html_tags_removed(self) -> None:
        """HTML tags are stripped before hyphenation."""
        assert create_slug("<b>Bold</b> Trailer") == "bold-trailer"

    def test_punctuation_collapsed(self) -> None:
        """Runs of unsupported characters become one hyphen."""
        assert create_slug("  Trailer!!!  --  X  ") == "trailer-x"

    def test_no_edge_hyphens(self) -> None:
        """Result never starts or ends with a hyphen."""
        slug = create_slug("--Причіп--")
        assert slug == "prychip"

    def test_empty_inputs(self) -> None:
        """Blank and non-string input yields an empty slug."""
        assert create_slug("") == ""
        assert create_slug("   ") == ""
        assert create_slug(None) == ""
        assert create_slug(123) == ""
        assert create_slug("!!!") == ""

    def test_truncated_to_max_length(self) -> None:
        """Slugs are capped at the maximum length."""
        slug = create_slug("a" * 150)
        assert len(slug) == SLUG_MAX_LENGTH

    def test_truncation_does_not_leave_hyphen(self) -> None:
        """A hyphen at the cut point is removed."""
        slug = create_slug("a" * 99 + " b")
        assert slug == "a" * 99

    def test_idempotent(self) -> None:
        """Slugifying a slug returns it unchanged."""
        for text in ["Причіп легковий Кремень ПЛ-2", "Boat Trailer 500", "Сіль"]:
            slug = create_slug(text)
            assert create_slug(slug) == slug


class TestWithSuffix:
    """Tests for numeric suffixes."""

    def test_appends_counter(self) -> None:
        """Counter is appended with a hyphen."""
        assert with_suffix("kremen-pl-2", 3) == "kremen-pl-2-3"

    def test_stays_within_max_length(self) -> None:
        """Long slugs are shortened to fit the suffix."""
        slug = with_suffix("a" * SLUG_MAX_LENGTH, 12)
        assert len(slug) == SLUG_MAX_LENGTH
        assert slug.endswith("-12")


class TestGenerateUniqueSlug:
    """Tests for unique slug generation."""

    @pytest.mark.asyncio
    async def test_free_slug_returned_as_is(self) -> None:
        """An unused slug needs no suffix."""
        assert await generate_unique_slug("Кремень", taken()) == "kremen"

    @pytest.mark.asyncio
    async def test_counter_suffix_on_collision(self) -> None:
        """Collisions are resolved with an increasing counter."""
        slug_exists = taken("kremen", "kremen-1")
        assert await generate_unique_slug("Кремень", slug_exists) == "kremen-2"

    @pytest.mark.asyncio
    async def test_exclude_id_passed_to_check(self) -> None:
        """The excluded record ID reaches the existence check."""
        slug_exists = taken()
        await generate_unique_slug("Кремень", slug_exists, exclude_id="abc")
        assert slug_exists.calls == [("kremen", "abc")]

    @pytest.mark.asyncio
    async def test_empty_text_uses_default(self) -> None:
        """Text without slug characters falls back to the default slug."""
        assert await generate_unique_slug("!!!", taken()) == DEFAULT_SLUG

    @pytest.mark.asyncio
    async def test_exhausted_attempts_raise_duplicate(self) -> None:
        """Running out of candidates is a duplicate key error."""
        slug_exists = taken("kremen", "kremen-1", "kremen-2")

        with pytest.raises(DuplicateKeyError) as exc_info:
            await generate_unique_slug("Кремень", slug_exists, max_attempts=3)

        assert exc_info.value.kind is ErrorKind.DUPLICATE_KEY
        assert exc_info.value.status_code == 409
        assert len(slug_exists.calls) == 3
