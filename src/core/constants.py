"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings,
use `src/core/config.py` instead.

Categories:
- Provider identity: credential discriminators and display names
- Timeouts and cache windows: defaults for outbound calls and client reuse
- Headers: names used on upstream and downstream HTTP messages
- Pagination: defaults for draining cursor-based endpoints
- Limits: truncation and safety limits

Example:
    >>> from src.core.constants import BEARER_PREFIX, ON_BEHALF_OF_HEADER
    >>> headers = {"Authorization": f"{BEARER_PREFIX}{api_key}"}
"""

# =============================================================================
# Provider Identity
# =============================================================================

MURAL_PROVIDER_TYPE: str = "mural"
"""providerType discriminator stored on Mural integration credentials."""


# =============================================================================
# Timeouts and Cache Windows
# =============================================================================

PROVIDER_TIMEOUT_DEFAULT: float = 30.0
"""Default timeout for external provider API calls in seconds."""

PROVIDER_CACHE_TTL_SECONDS: float = 300.0
"""How long a resolved provider client is reused before credentials are re-read."""


# =============================================================================
# Headers
# =============================================================================

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for Bearer tokens."""

ON_BEHALF_OF_HEADER: str = "on-behalf-of"
"""Header scoping an upstream call to an organization within the tenant."""

TRANSFER_API_KEY_HEADER: str = "transfer-api-key"
"""Header carrying the secondary key required for money movement."""

UPSTREAM_RETRY_AFTER_HEADER: str = "retry-after-api"
"""Header the upstream API uses to hint how long to back off."""

RATE_LIMIT_EXCEEDED_HEADER: str = "X-Rate-Limit-Exceeded"
"""Response header flagging a throttled request to API consumers."""


# =============================================================================
# Rate Limiting
# =============================================================================

RATE_LIMIT_RETRY_AFTER_DEFAULT: int = 30
"""Retry hint (seconds) used when the upstream omits retry-after-api."""

THROTTLER_EXCEPTION_MARKER: str = "ThrottlerException"
"""Substring identifying throttling reported by the upstream as HTTP 500."""


# =============================================================================
# Pagination
# =============================================================================

PAGINATION_PAGE_SIZE_DEFAULT: int = 100
"""Page size requested when draining cursor-based endpoints."""

PAGINATION_MAX_ITEMS_DEFAULT: int = 1000
"""Upper bound on items collected by a single drain."""


# =============================================================================
# Response Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum length for response body in error messages (truncation limit)."""
