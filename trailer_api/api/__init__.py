"""API layer module.

Contains FastAPI routers, middleware and request/response schemas.
"""

from trailer_api.api.health import router as health_router
from trailer_api.api.info import router as info_router
from trailer_api.api.trailers import router as trailers_router

__all__ = [
    "health_router",
    "info_router",
    "trailers_router",
]
