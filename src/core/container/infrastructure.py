"""Infrastructure dependency factories.

App-scoped singletons (database, logger, token service, retry policy) and
request-scoped database sessions.

Singletons are cached with lru_cache; tests replace them through
``app.dependency_overrides`` rather than touching the cache.
"""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.enums import Environment

if TYPE_CHECKING:
    from src.application.services import RateLimitRetryPolicy
    from src.domain.protocols import LoggerProtocol, TokenVerificationProtocol
    from src.infrastructure.persistence.database import Database


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> "Database":
    """Get database manager singleton (app-scoped).

    Returns Database instance with connection pool.
    Use get_db_session() for per-request sessions.

    Returns:
        Database manager instance.
    """
    from src.infrastructure.persistence.database import Database

    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Creating the adapter configures structlog for the process:
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production, or LOG_JSON=true: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    use_json = settings.log_json or settings.environment != Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_token_service() -> "TokenVerificationProtocol | None":
    """Get bearer token verifier singleton (app-scoped).

    Returns:
        CognitoTokenService bound to the configured user pool, or None when
        no user pool is configured (every authenticated route then rejects).
    """
    issuer = settings.cognito_issuer
    if issuer is None:
        return None

    from src.infrastructure.security import CognitoTokenService

    return CognitoTokenService(
        issuer=issuer,
        client_id=settings.cognito_client_id,
    )


@lru_cache()
def get_retry_policy() -> "RateLimitRetryPolicy":
    """Get the retry policy applied to throttled provider calls.

    Returns:
        RateLimitRetryPolicy built from settings.
    """
    from src.application.services import RateLimitRetryPolicy

    return RateLimitRetryPolicy(
        max_attempts=settings.rate_limit_max_attempts,
        max_wait=settings.rate_limit_max_wait_seconds,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Creates new session per request with automatic transaction management:
        - Commits on success
        - Rolls back on exception
        - Always closes session

    Yields:
        Database session for request duration.
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
