"""URL-safe slug generation with Ukrainian transliteration."""

import re
from collections.abc import Awaitable, Callable

import structlog

from trailer_api.domain.exceptions import DuplicateKeyError

logger = structlog.get_logger()

SLUG_MAX_LENGTH = 100
DEFAULT_SLUG = "trailer"

# Input is lowercased before lookup, so only lowercase letters are mapped.
UKRAINIAN_TO_LATIN = {
    "а": "a", "б": "b", "в": "v", "г": "h", "ґ": "g", "д": "d", "е": "e",
    "є": "ie", "ж": "zh", "з": "z", "и": "y", "і": "i", "ї": "i", "й": "i",
    "к": "k", "л": "l", "м": "m", "н": "n", "о": "o", "п": "p", "р": "r",
    "с": "s", "т": "t", "у": "u", "ф": "f", "х": "kh", "ц": "ts", "ч": "ch",
    "ш": "sh", "щ": "shch", "ь": "", "ю": "iu", "я": "ia",
}

_HTML_TAG = re.compile(r"<[^>]*>")
_NOT_SLUG_CHARS = re.compile(r"[^a-z0-9-]+")
_HYPHEN_RUN = re.compile(r"-{2,}")

SlugExists = Callable[[str, str | None], Awaitable[bool]]


def create_slug(text: object) -> str:
    """Convert text into a lowercase URL-safe slug.

    Never raises: non-string or blank input yields an empty string.

    Args:
        text: Text to convert, typically a trailer name.

    Returns:
        Slug of at most ``SLUG_MAX_LENGTH`` characters.

    Example:
        >>> create_slug("Причіп легковий Кремень ПЛ-2")
        'prychip-lehkovyi-kremen-pl-2'
    """
    if not isinstance(text, str) or not text.strip():
        return ""

    value = "".join(UKRAINIAN_TO_LATIN.get(char, char) for char in text.strip().lower())
    value = _HTML_TAG.sub("", value)
    value = _NOT_SLUG_CHARS.sub("-", value)
    value = _HYPHEN_RUN.sub("-", value)
    value = value.strip("-")

    # Truncation can expose a hyphen at the cut point
    return value[:SLUG_MAX_LENGTH].rstrip("-")


def with_suffix(base_slug: str, counter: int) -> str:
    """Append a numeric suffix while staying within the length limit.

    Args:
        base_slug: Normalized slug.
        counter: Suffix number.

    Returns:
        Suffixed slug, e.g. ``kremen-pl-2-3``.
    """
    suffix = f"-{counter}"
    head = base_slug[: SLUG_MAX_LENGTH - len(suffix)].rstrip("-")
    return f"{head}{suffix}"


async def generate_unique_slug(
    text: str,
    slug_exists: SlugExists,
    exclude_id: str | None = None,
    max_attempts: int = 1000,
) -> str:
    """Generate a slug that no other record uses.

    Tries ``base``, then ``base-1``, ``base-2`` and so on.

    Args:
        text: Text to convert to slug.
        slug_exists: Async predicate ``(slug, exclude_id) -> bool``.
        exclude_id: Record ID ignored by the check (for updates).
        max_attempts: Maximum number of candidates to try.

    Returns:
        Unique slug.

    Raises:
        DuplicateKeyError: If every candidate is taken.
    """
    base_slug = create_slug(text) or DEFAULT_SLUG
    slug = base_slug

    for counter in range(1, max_attempts + 1):
        if not await slug_exists(slug, exclude_id):
            return slug
        slug = with_suffix(base_slug, counter)

    logger.warning(
        "Slug candidates exhausted",
        base_slug=base_slug,
        attempts=max_attempts,
    )
    raise DuplicateKeyError("slug", base_slug)
