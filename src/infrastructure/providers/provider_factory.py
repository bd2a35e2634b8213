"""Provider Factory Implementation.

Resolves a tenant's account identifier to a ready-to-use MuralProvider.
Stored credentials are read at most once per TTL window per account; within
the window the same client instance is handed out again.

Architecture:
- Infrastructure layer (composes persistence lookup + provider client)
- One factory instance per process, created by the application lifespan
  and stored on ``app.state`` (tests build their own instances)
- Returns Result types; construction errors raise

Concurrency:
    The cache is shared without locks. Two resolutions racing on the same
    missing or stale account may both read the store and both build a
    client; the last write wins. Clients are stateless wrappers around
    credentials, so the duplicate is wasted work only.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from src.core.constants import (
    MURAL_PROVIDER_TYPE,
    PROVIDER_CACHE_TTL_SECONDS,
    PROVIDER_TIMEOUT_DEFAULT,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import (
    CredentialError,
    CredentialExpiredError,
    CredentialNotFoundError,
)
from src.domain.protocols import CredentialLookupProtocol
from src.infrastructure.providers.mural import MuralProvider

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class _CacheEntry:
    provider: MuralProvider
    created_at: float
    expiry_date: datetime | None


class ProviderFactory:
    """Per-account MuralProvider resolution with a TTL cache.

    Attributes:
        ttl_seconds: How long a resolved client is reused.

    Example:
        >>> factory = ProviderFactory(lookup=credential_lookup)
        >>> result = await factory.resolve("acme")
        >>> match result:
        ...     case Success(value=provider):
        ...         accounts = await provider.get_accounts()
        ...     case Failure(error=error):
        ...         print(error.kind, error.message)
    """

    def __init__(
        self,
        *,
        lookup: CredentialLookupProtocol,
        ttl_seconds: float = PROVIDER_CACHE_TTL_SECONDS,
        provider_timeout: float = PROVIDER_TIMEOUT_DEFAULT,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        """Initialize factory.

        Args:
            lookup: Credential store query (find-one-by provider/account).
            ttl_seconds: Cache window in seconds.
            provider_timeout: Per-request timeout given to built clients.
            clock: Monotonic clock used for cache ages.
            now: Wall clock used for credential expiry checks.
        """
        self._lookup = lookup
        self._ttl_seconds = ttl_seconds
        self._provider_timeout = provider_timeout
        self._clock = clock
        self._now = now
        self._cache: dict[str, _CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    async def resolve(
        self,
        account_identifier: str,
    ) -> Result[MuralProvider, CredentialError]:
        """Return the MuralProvider for an account.

        Args:
            account_identifier: Tenant key.

        Returns:
            Success(MuralProvider): Cached or freshly built client.
            Failure(CredentialNotFoundError): No record, or record lacks
                baseUrl/apiKey.
            Failure(CredentialExpiredError): Record is past its expiry date.

        Raises:
            ValueError: If account_identifier is empty.
        """
        if not account_identifier:
            raise ValueError("account_identifier cannot be empty")

        entry = self._cache.get(account_identifier)
        if entry is not None and self._clock() - entry.created_at < self._ttl_seconds:
            if entry.expiry_date is not None and entry.expiry_date < self._now():
                # Credential lapsed while cached
                self._cache.pop(account_identifier, None)
                return self._expired(account_identifier)

            logger.debug(
                "provider_factory_cache_hit",
                account_identifier=account_identifier,
            )
            return Success(value=entry.provider)

        credential = await self._lookup.find_one(
            provider_type=MURAL_PROVIDER_TYPE,
            account_identifier=account_identifier,
        )

        if credential is None:
            logger.info(
                "provider_factory_credentials_missing",
                account_identifier=account_identifier,
            )
            return Failure(
                error=CredentialNotFoundError(
                    code=ErrorCode.CREDENTIAL_NOT_FOUND,
                    message=f"No Mural credentials found for account {account_identifier}",
                    account_identifier=account_identifier,
                )
            )

        if not credential.has_required_fields():
            logger.warning(
                "provider_factory_credentials_invalid",
                account_identifier=account_identifier,
            )
            return Failure(
                error=CredentialNotFoundError(
                    code=ErrorCode.CREDENTIAL_INVALID,
                    message=f"Invalid Mural credentials for account {account_identifier}",
                    account_identifier=account_identifier,
                )
            )

        if credential.is_expired(self._now()):
            self._cache.pop(account_identifier, None)
            return self._expired(account_identifier)

        provider = MuralProvider(
            base_url=credential.base_url or "",
            api_key=credential.api_key or "",
            transfer_api_key=credential.transfer_api_key,
            timeout=self._provider_timeout,
        )

        expiry = credential.expiry_date
        if expiry is not None and expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)

        self._cache[account_identifier] = _CacheEntry(
            provider=provider,
            created_at=self._clock(),
            expiry_date=expiry,
        )

        logger.info(
            "provider_factory_provider_created",
            account_identifier=account_identifier,
            has_transfer_api_key=provider.has_transfer_api_key,
        )
        return Success(value=provider)

    def invalidate(self, account_identifier: str | None = None) -> None:
        """Drop one cached client, or all of them when no account is given.

        Idempotent: invalidating an uncached account is a no-op.
        """
        if account_identifier is None:
            count = len(self._cache)
            self._cache.clear()
            logger.info("provider_factory_cache_cleared", entries=count)
            return

        if self._cache.pop(account_identifier, None) is not None:
            logger.info(
                "provider_factory_cache_invalidated",
                account_identifier=account_identifier,
            )

    def cached_accounts(self) -> list[str]:
        """Account identifiers with a cache entry (fresh or stale)."""
        return sorted(self._cache)

    def _expired(
        self,
        account_identifier: str,
    ) -> Failure[CredentialError]:
        logger.warning(
            "provider_factory_credentials_expired",
            account_identifier=account_identifier,
        )
        return Failure(
            error=CredentialExpiredError(
                code=ErrorCode.CREDENTIAL_EXPIRED,
                message=(
                    f"Mural credentials for account {account_identifier} have "
                    "expired. Please update your credentials."
                ),
                account_identifier=account_identifier,
            )
        )
