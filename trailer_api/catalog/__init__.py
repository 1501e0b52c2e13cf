"""Trailer Catalog.

Provides the trailer model, slug generation, query filters,
repository and service for catalog operations.
"""

from trailer_api.catalog.filters import PaginatedResult, PaginationParams, TrailerFilter
from trailer_api.catalog.models import Trailer
from trailer_api.catalog.repository import TrailerRepository
from trailer_api.catalog.service import CatalogService
from trailer_api.catalog.slug import create_slug, generate_unique_slug

__all__ = [
    # Models
    "Trailer",
    # Slugs
    "create_slug",
    "generate_unique_slug",
    # Filters
    "PaginatedResult",
    "PaginationParams",
    "TrailerFilter",
    # Repository
    "TrailerRepository",
    # Service
    "CatalogService",
]
