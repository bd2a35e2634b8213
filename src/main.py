"""
Main FastAPI application entry point.

This module initializes the FastAPI application instance: logging, the
provider factory (one per process, kept on ``app.state``), middleware,
exception handlers and routers.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.container import build_provider_factory, get_database, get_logger
from src.presentation.routers import system_router
from src.presentation.routers.api.middleware.trace_middleware import (
    TRACE_ID_HEADER,
    TraceMiddleware,
)
from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: Configure logging, build the provider factory
    - Shutdown: Dispose the database connection pool

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    database = get_database()

    app.state.provider_factory = build_provider_factory(database)
    logger.info(
        "application_started",
        environment=settings.environment.value,
        provider_cache_ttl_seconds=settings.provider_cache_ttl_seconds,
    )

    yield

    app.state.provider_factory.invalidate()
    await database.close()
    logger.info("application_stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="Multi-tenant proxy for the Mural Pay API",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# CORS for the admin frontend; expose headers clients read on throttling
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[TRACE_ID_HEADER, "Retry-After", "X-Rate-Limit-Exceeded"],
)

# Register global exception handlers (RFC 9457 error responses)
register_exception_handlers(app)

# System endpoints (root, health, config)
app.include_router(system_router)

# Include API v1 routers (RESTful resource-based endpoints)
app.include_router(v1_router)
