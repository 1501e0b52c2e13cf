"""Trailer Store API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, exception handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trailer_api.api.errors import setup_exception_handlers
from trailer_api.api.health import router as health_router
from trailer_api.api.info import router as info_router
from trailer_api.api.middleware import setup_middleware
from trailer_api.api.trailers import router as trailers_router
from trailer_api.infrastructure.config import settings
from trailer_api.infrastructure.database import engine
from trailer_api.infrastructure.logging_config import setup_logging

setup_logging(settings.log_level, json_logs=settings.log_json or settings.is_production)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Trailer Store API",
        version=settings.api_version,
        environment=settings.environment,
        debug=settings.debug,
    )

    yield

    logger.info("Shutting down Trailer Store API")
    await engine.dispose()


app = FastAPI(
    title=settings.project_name,
    description="Catalog CRUD service for trailers",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, payload limit, error handling)
setup_middleware(app)

# Exception handlers (tagged errors, validation, routing)
setup_exception_handlers(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(info_router)
app.include_router(trailers_router)
