"""Provider error types for domain protocol contracts.

These errors are part of the provider client contract - they define the
normalized failure cases a provider call can return, independent of the
upstream API's own error format.

Architecture:
- Domain layer errors (part of protocol contract)
- Inherit from DomainError (core layer)
- Used in Result types (railway-oriented programming)
- Each error exposes a ProviderErrorKind for status mapping and retry

Usage:
    from src.domain.errors import ProviderError, ProviderRateLimitError
    from src.core.result import Result, Success, Failure

    async def get_account(
        self, account_id: str
    ) -> Result[dict[str, Any], ProviderError]:
        if response.status_code == 429:
            return Failure(ProviderRateLimitError(..., retry_after=30))
        return Success(data)
"""

from dataclasses import dataclass, field
from typing import Any

from src.core.errors import DomainError
from src.domain.enums import ProviderErrorKind


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderError(DomainError):
    """Base provider API error.

    Subclassed for each normalized failure kind.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        provider_name: Name of the provider (mural).
        details: Additional context (status code, response excerpt).
    """

    provider_name: str
    details: dict[str, Any] | None = None

    @property
    def kind(self) -> ProviderErrorKind:
        """Normalized failure kind."""
        return ProviderErrorKind.INTERNAL


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderBadRequestError(ProviderError):
    """Upstream rejected the request payload (HTTP 400).

    Attributes:
        errors: Individual validation messages reported by the upstream.
    """

    errors: list[str] = field(default_factory=list)

    @property
    def kind(self) -> ProviderErrorKind:
        return ProviderErrorKind.BAD_REQUEST


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderAuthenticationError(ProviderError):
    """Upstream rejected the API key (HTTP 401 or 403).

    Recovery: Update the stored integration credential.
    """

    @property
    def kind(self) -> ProviderErrorKind:
        return ProviderErrorKind.UNAUTHORIZED


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderNotFoundError(ProviderError):
    """Requested upstream resource does not exist (HTTP 404)."""

    @property
    def kind(self) -> ProviderErrorKind:
        return ProviderErrorKind.NOT_FOUND


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderRateLimitError(ProviderError):
    """Provider rate limit exceeded.

    Raised when the provider returns 429 Too Many Requests, or a 500 whose
    body names the upstream throttler.

    Recovery: Wait for retry_after seconds before retrying.

    Attributes:
        retry_after: Seconds to wait before retrying (from retry-after-api,
            or the default when the header is absent).
        retry_after_hinted: False when retry_after is the default rather
            than an upstream hint.
    """

    retry_after: int
    retry_after_hinted: bool = True

    @property
    def kind(self) -> ProviderErrorKind:
        return ProviderErrorKind.RATE_LIMITED


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderUnavailableError(ProviderError):
    """Provider API is unreachable.

    Raised when:
    - Connection timeout occurs
    - DNS resolution fails
    - Connection is refused or reset

    Recovery: Retry later.
    """

    @property
    def kind(self) -> ProviderErrorKind:
        return ProviderErrorKind.SERVICE_UNAVAILABLE


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderInternalError(ProviderError):
    """Any other upstream or local failure.

    Covers unexpected status codes, malformed JSON, and local
    misconfiguration such as a missing transfer API key.

    Attributes:
        status_code: Upstream HTTP status, when one was received.
    """

    status_code: int | None = None
