"""API directory endpoint.

Lists the available trailer endpoints.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from trailer_api.api.responses import build_envelope
from trailer_api.infrastructure.config import settings

router = APIRouter(prefix="/api", tags=["Info"])

TRAILER_ENDPOINTS = {
    "GET /api/trailers": "Get all trailers with filtering and pagination",
    "GET /api/trailers/featured": "Get featured trailers",
    "GET /api/trailers/categories": "Get all categories with counts",
    "GET /api/trailers/brands": "Get all brands with counts",
    "GET /api/trailers/search": "Search trailers",
    "GET /api/trailers/:id": "Get single trailer by ID or slug",
    "POST /api/trailers": "Create new trailer",
    "PUT /api/trailers/:id": "Update trailer",
    "PATCH /api/trailers/:id/stock": "Update trailer stock",
    "DELETE /api/trailers/:id": "Delete trailer",
}


@router.get("", summary="API directory")
async def api_info() -> JSONResponse:
    """Describe the API and its endpoints."""
    return JSONResponse(
        content=build_envelope(
            True,
            settings.project_name,
            version=settings.api_version,
            endpoints={"trailers": TRAILER_ENDPOINTS},
            documentation="/docs",
        )
    )
