"""Provider factory wiring.

The ProviderFactory owns a process-wide client cache, so exactly one
instance is built per application (in the lifespan) and kept on
``app.state``. Request handlers fetch it with get_provider_factory().
"""

from typing import TYPE_CHECKING

from fastapi import Request

from src.core.config import settings

if TYPE_CHECKING:
    from src.infrastructure.persistence.database import Database
    from src.infrastructure.providers.provider_factory import ProviderFactory


def build_provider_factory(database: "Database") -> "ProviderFactory":
    """Create the application's provider factory.

    Args:
        database: Database backing the credential lookup.

    Returns:
        ProviderFactory reading credentials from the database.
    """
    from src.infrastructure.persistence.credential_lookup import (
        DatabaseCredentialLookup,
    )
    from src.infrastructure.providers.provider_factory import ProviderFactory

    return ProviderFactory(
        lookup=DatabaseCredentialLookup(database),
        ttl_seconds=settings.provider_cache_ttl_seconds,
        provider_timeout=settings.provider_timeout_seconds,
    )


def get_provider_factory(request: Request) -> "ProviderFactory":
    """Get the application's provider factory (app-scoped).

    Args:
        request: Current request (gives access to app.state).

    Returns:
        ProviderFactory created during application startup.
    """
    return request.app.state.provider_factory
