"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text

from trailer_api.api.responses import error_response, utc_timestamp
from trailer_api.infrastructure import database

router = APIRouter()
logger = structlog.get_logger()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    message: str
    version: str
    timestamp: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Liveness status with service version.
    """
    from trailer_api.infrastructure.config import settings

    return HealthResponse(
        status="OK",
        message=f"{settings.project_name} is running",
        version=settings.api_version,
        timestamp=utc_timestamp(),
    )


@router.get("/ready", response_model=None)
async def readiness_check() -> dict[str, str] | JSONResponse:
    """Check if the database accepts queries.

    Returns:
        Readiness status, or a 503 envelope when the database is down.
    """
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Readiness check failed", error=str(e))
        return error_response("Database connection error", 503)

    return {"status": "ready"}
