"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_database, get_provider_factory, ...

The container is organized into modules by concern:
- infrastructure: Database, sessions, logging, token verification, retry policy
- repositories: Repository factories
- providers: Provider factory construction and lookup
"""

from src.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_logger,
    get_retry_policy,
    get_token_service,
)
from src.core.container.providers import (
    build_provider_factory,
    get_provider_factory,
)
from src.core.container.repositories import get_integration_credential_repository

__all__ = [
    "build_provider_factory",
    "get_database",
    "get_db_session",
    "get_integration_credential_repository",
    "get_logger",
    "get_provider_factory",
    "get_retry_policy",
    "get_token_service",
]
