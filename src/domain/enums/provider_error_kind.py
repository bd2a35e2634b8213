"""Normalized failure kinds for upstream provider calls.

Every failure coming out of a provider client or the provider factory
carries exactly one kind. The presentation layer maps kinds to HTTP
status codes; the retry loop only reacts to RATE_LIMITED.

Usage:
    from src.domain.enums import ProviderErrorKind

    if error.kind is ProviderErrorKind.RATE_LIMITED:
        await asyncio.sleep(error.retry_after)
"""

from enum import Enum


class ProviderErrorKind(str, Enum):
    """Failure kind of a provider or credential resolution error."""

    BAD_REQUEST = "bad_request"
    """Malformed caller input or payload rejected by the upstream (400)."""

    UNAUTHORIZED = "unauthorized"
    """Upstream rejected the API key (401 and 403)."""

    FORBIDDEN = "forbidden"
    """Stored credentials exist but have expired."""

    NOT_FOUND = "not_found"
    """Missing credential record or missing upstream resource."""

    RATE_LIMITED = "rate_limited"
    """Upstream throttling; carries a retry hint."""

    SERVICE_UNAVAILABLE = "service_unavailable"
    """Upstream unreachable (timeout, connection failure)."""

    INTERNAL = "internal"
    """Anything else, including local misconfiguration."""
