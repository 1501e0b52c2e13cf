#!/usr/bin/env python3
"""Fill the trailer catalog with sample data.

Sample records go through ``TrailerCreateRequest`` first, so they obey
the same rules as API input, and then through ``CatalogService`` so
slugs and stock flags are derived the usual way.

Usage:
    python scripts/seed_trailers.py             # replace the catalog
    python scripts/seed_trailers.py --no-clear  # add to the existing catalog
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

# Make the project root importable when run as a script
sys.path.insert(0, str(Path(__file__).parent.parent))

from trailer_api.api.schemas import TrailerCreateRequest
from trailer_api.catalog.seeds import SAMPLE_TRAILERS
from trailer_api.catalog.service import CatalogService
from trailer_api.infrastructure.database import async_session_factory, create_tables
from trailer_api.infrastructure.logging_config import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the trailer catalog with sample trailers")
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="keep existing trailers instead of deleting them first",
    )
    return parser.parse_args(argv)


async def seed(clear_existing: bool) -> dict[str, Any]:
    """Validate the sample trailers and store them.

    Args:
        clear_existing: Delete every trailer before inserting.

    Returns:
        Counts reported by ``CatalogService.seed_catalog``.
    """
    records = [TrailerCreateRequest.model_validate(raw).to_fields() for raw in SAMPLE_TRAILERS]

    await create_tables()
    async with async_session_factory() as session:
        return await CatalogService(session).seed_catalog(records, clear_existing=clear_existing)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging()

    result = asyncio.run(seed(clear_existing=not args.no_clear))

    print("Trailer catalog seeded")
    print(f"  deleted:    {result['deleted']}")
    print(f"  created:    {result['trailers_created']}")
    print(f"  categories: {result['categories_used']}")
    print(f"  brands:     {result['brands_used']}")


if __name__ == "__main__":
    main()
