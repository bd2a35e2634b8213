"""System router for non-versioned application endpoints.

Provides external-facing system endpoints that are not part of the
versioned API contract: root, health and configuration.

These endpoints are public and side-effect free to support load balancer
probes and basic diagnostics.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.container import get_database
from src.infrastructure.persistence.database import Database


system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint - basic status check.

    Returns:
        dict[str, str]: Service name, status and version.
    """
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health(
    request: Request,
    database: Annotated[Database, Depends(get_database)],
) -> JSONResponse:
    """Health check endpoint for monitoring and load balancers.

    Reports the credential store connection and how many tenants currently
    hold a cached provider client.

    Returns:
        JSONResponse: 200 when the database answers, 503 otherwise.
    """
    database_ok = await database.check_connection()
    factory = getattr(request.app.state, "provider_factory", None)

    return JSONResponse(
        status_code=(
            status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE
        ),
        content={
            "status": "healthy" if database_ok else "unhealthy",
            "database": "ok" if database_ok else "unavailable",
            "cached_providers": len(factory.cached_accounts()) if factory else 0,
        },
    )


@system_router.get("/config")
async def get_config() -> JSONResponse:
    """Configuration debug endpoint (development only).

    Returns:
        JSONResponse: Configuration details (sanitized) or 403 in
            non-development environments.
    """
    if not settings.is_development:
        return JSONResponse(
            status_code=403,
            content={"detail": "Config endpoint only available in development"},
        )

    return JSONResponse(
        content={
            "environment": settings.environment.value,
            "debug": settings.debug,
            "api": {
                "name": settings.app_name,
                "version": settings.app_version,
                "base_url": settings.api_base_url,
            },
            "database": {
                "url": "<redacted>",  # Never expose credentials
                "echo": settings.db_echo,
            },
            "providers": {
                "cache_ttl_seconds": settings.provider_cache_ttl_seconds,
                "timeout_seconds": settings.provider_timeout_seconds,
                "rate_limit_max_attempts": settings.rate_limit_max_attempts,
                "rate_limit_max_wait_seconds": settings.rate_limit_max_wait_seconds,
            },
            "auth": {
                "issuer": settings.cognito_issuer,
            },
            "cors": {
                "origins": settings.cors_origins,
                "allow_credentials": settings.cors_allow_credentials,
            },
        }
    )
