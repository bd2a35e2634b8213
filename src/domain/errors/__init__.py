"""Domain errors package.

Exports all domain-level error classes for convenient importing.

Usage:
    from src.domain.errors import ProviderError, ProviderRateLimitError
    from src.domain.errors import CredentialError, CredentialExpiredError
"""

from src.domain.errors.credential_error import (
    CredentialError,
    CredentialExpiredError,
    CredentialNotFoundError,
)
from src.domain.errors.provider_error import (
    ProviderAuthenticationError,
    ProviderBadRequestError,
    ProviderError,
    ProviderInternalError,
    ProviderNotFoundError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)

__all__ = [
    # Credential resolution errors
    "CredentialError",
    "CredentialExpiredError",
    "CredentialNotFoundError",
    # Provider API errors
    "ProviderError",
    "ProviderAuthenticationError",
    "ProviderBadRequestError",
    "ProviderInternalError",
    "ProviderNotFoundError",
    "ProviderRateLimitError",
    "ProviderUnavailableError",
]
