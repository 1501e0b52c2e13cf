"""Trailer API endpoints.

Provides listing, filtering, search, CRUD and stock operations for
trailers. Every endpoint answers with the standard envelope.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from trailer_api.api.responses import success_response
from trailer_api.api.schemas import (
    MAX_QUANTITY,
    Envelope,
    StockUpdateRequest,
    TrailerCreateRequest,
    TrailerResponse,
    TrailerUpdateRequest,
)
from trailer_api.catalog.filters import DEFAULT_SORT, PaginationParams, TrailerFilter
from trailer_api.catalog.models import Trailer
from trailer_api.catalog.service import CatalogService
from trailer_api.domain.exceptions import InternalError, TrailerStoreError, ValidationFailedError
from trailer_api.domain.value_objects import Category, PriceRange
from trailer_api.infrastructure.config import settings
from trailer_api.infrastructure.database import get_session

logger = structlog.get_logger()

router = APIRouter(prefix="/api/trailers", tags=["Trailers"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": Envelope},
    404: {"model": Envelope},
    500: {"model": Envelope},
}


# ============================================================================
# Dependencies
# ============================================================================


def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request session."""
    return CatalogService(session)


ServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]


# ============================================================================
# Helpers
# ============================================================================


@contextmanager
def operation_errors(message: str) -> Iterator[None]:
    """Turn unexpected failures of an operation into an internal error.

    Tagged catalog errors pass through unchanged.

    Args:
        message: Error message reported to the client.
    """
    try:
        yield
    except TrailerStoreError:
        raise
    except Exception as e:
        logger.exception(message, error=str(e))
        raise InternalError(message) from e


def trailer_to_response(trailer: Trailer) -> dict[str, Any]:
    """Convert Trailer model to its camelCase JSON form."""
    return TrailerResponse.model_validate(trailer).model_dump(by_alias=True, mode="json")


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="List trailers",
    description="Get trailers with filtering, search, sorting and pagination.",
)
async def list_trailers(
    service: ServiceDep,
    page: Annotated[int, Query(ge=1, le=settings.max_page)] = 1,
    limit: Annotated[int, Query(ge=1, le=settings.max_page_size)] = settings.default_page_size,
    category: Category | None = None,
    brand: str | None = None,
    min_price: Annotated[float | None, Query(alias="minPrice", ge=0, allow_inf_nan=False)] = None,
    max_price: Annotated[float | None, Query(alias="maxPrice", ge=0, allow_inf_nan=False)] = None,
    in_stock: Annotated[bool | None, Query(alias="inStock")] = None,
    is_featured: Annotated[bool | None, Query(alias="isFeatured")] = None,
    search: str | None = None,
    sort_by: Annotated[str, Query(alias="sortBy")] = DEFAULT_SORT,
    sort_order: Annotated[str, Query(alias="sortOrder")] = "desc",
) -> JSONResponse:
    """List trailers.

    - **category**, **inStock**, **isFeatured**: exact match.
    - **brand**: case-insensitive substring.
    - **minPrice**, **maxPrice**: inclusive price range.
    - **search**: substring across name, brand, model, category and keywords.
    - **sortBy**, **sortOrder**: ordering (default newest first).
    """
    filters = TrailerFilter(
        category=category,
        brand=brand.strip() if brand else None,
        price=PriceRange(min_price=min_price, max_price=max_price),
        in_stock=in_stock,
        is_featured=is_featured,
        search=search.strip() if search else None,
    )
    pagination = PaginationParams(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )

    with operation_errors("Failed to retrieve trailers"):
        result = await service.list_trailers(filters, pagination)

    return success_response(
        {
            "trailers": [trailer_to_response(t) for t in result.items],
            "pagination": result.pagination(),
        },
        "Trailers retrieved successfully",
    )


@router.get(
    "/featured",
    response_model=Envelope,
    summary="Featured trailers",
    description="Get featured in-stock trailers, newest first.",
)
async def get_featured_trailers(
    service: ServiceDep,
    limit: Annotated[int, Query(ge=1, le=settings.max_page_size)] = settings.default_page_size,
) -> JSONResponse:
    """Get featured trailers."""
    with operation_errors("Failed to retrieve featured trailers"):
        trailers = await service.get_featured(limit)

    return success_response(
        [trailer_to_response(t) for t in trailers],
        "Featured trailers retrieved successfully",
    )


@router.get(
    "/categories",
    response_model=Envelope,
    summary="Categories",
    description="Get all categories with in-stock counts.",
)
async def get_categories(service: ServiceDep) -> JSONResponse:
    """Get categories with counts."""
    with operation_errors("Failed to retrieve categories"):
        categories = await service.get_categories()

    return success_response(categories, "Categories retrieved successfully")


@router.get(
    "/brands",
    response_model=Envelope,
    summary="Brands",
    description="Get all brands with in-stock counts.",
)
async def get_brands(service: ServiceDep) -> JSONResponse:
    """Get brands with counts."""
    with operation_errors("Failed to retrieve brands"):
        brands = await service.get_brands()

    return success_response(brands, "Brands retrieved successfully")


@router.get(
    "/search",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Search trailers",
    description="Search trailers by name, brand, model, category or keyword.",
)
async def search_trailers(
    service: ServiceDep,
    q: str | None = None,
    limit: Annotated[int, Query(ge=1, le=settings.max_page_size)] = settings.default_page_size,
) -> JSONResponse:
    """Search trailers.

    Raises:
        ValidationFailedError: If ``q`` is missing or blank.
    """
    query = (q or "").strip()
    if not query:
        raise ValidationFailedError(
            [{"field": "q", "message": "Search query is required", "value": q}],
            message="Search query is required",
        )

    with operation_errors("Search failed"):
        trailers = await service.search(query, limit)

    return success_response(
        [trailer_to_response(t) for t in trailers],
        "Search completed successfully",
    )


@router.get(
    "/{trailer_id}",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Get trailer",
    description="Get a single trailer by ID or slug.",
)
async def get_trailer(trailer_id: str, service: ServiceDep) -> JSONResponse:
    """Get a trailer by ID or slug."""
    with operation_errors("Failed to retrieve trailer"):
        trailer = await service.get_trailer(trailer_id)

    return success_response(trailer_to_response(trailer), "Trailer retrieved successfully")


@router.post(
    "",
    response_model=Envelope,
    status_code=status.HTTP_201_CREATED,
    responses={**ERROR_RESPONSES, 409: {"model": Envelope}},
    summary="Create trailer",
    description="Create a trailer; the slug is derived from the name when omitted.",
)
async def create_trailer(request: TrailerCreateRequest, service: ServiceDep) -> JSONResponse:
    """Create a trailer."""
    with operation_errors("Failed to create trailer"):
        trailer = await service.create_trailer(request.to_fields())

    return success_response(
        trailer_to_response(trailer),
        "Trailer created successfully",
        status.HTTP_201_CREATED,
    )


@router.put(
    "/{trailer_id}",
    response_model=Envelope,
    responses={**ERROR_RESPONSES, 409: {"model": Envelope}},
    summary="Update trailer",
    description="Partially update a trailer; a new name regenerates the slug.",
)
async def update_trailer(
    trailer_id: str,
    request: TrailerUpdateRequest,
    service: ServiceDep,
) -> JSONResponse:
    """Update a trailer."""
    with operation_errors("Failed to update trailer"):
        trailer = await service.update_trailer(trailer_id, request.to_fields())

    return success_response(trailer_to_response(trailer), "Trailer updated successfully")


@router.patch(
    "/{trailer_id}/stock",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Update stock",
    description="Set the stock quantity; availability follows the quantity.",
)
async def update_stock(
    trailer_id: str,
    request: StockUpdateRequest,
    service: ServiceDep,
) -> JSONResponse:
    """Update trailer stock.

    Raises:
        ValidationFailedError: If quantity is missing or out of range.
    """
    if request.quantity is None or not 0 <= request.quantity <= MAX_QUANTITY:
        raise ValidationFailedError(
            [
                {
                    "field": "quantity",
                    "message": f"Quantity must be an integer between 0 and {MAX_QUANTITY}",
                    "value": request.quantity,
                }
            ],
            message="Valid quantity is required",
        )

    with operation_errors("Failed to update stock"):
        trailer = await service.update_stock(trailer_id, request.quantity)

    return success_response(trailer_to_response(trailer), "Stock updated successfully")


@router.delete(
    "/{trailer_id}",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Delete trailer",
    description="Permanently delete a trailer.",
)
async def delete_trailer(trailer_id: str, service: ServiceDep) -> JSONResponse:
    """Delete a trailer."""
    with operation_errors("Failed to delete trailer"):
        await service.delete_trailer(trailer_id)

    return success_response(None, "Trailer deleted successfully")
