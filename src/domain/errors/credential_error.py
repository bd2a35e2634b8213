"""Integration credential resolution errors.

Returned by the provider factory when a tenant's stored credential cannot
be turned into a working provider client.

Usage:
    from src.domain.errors import CredentialExpiredError

    return Failure(CredentialExpiredError(
        code=ErrorCode.CREDENTIAL_EXPIRED,
        message=f"Mural credentials for account {account} have expired. ...",
        account_identifier=account,
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError
from src.domain.enums import ProviderErrorKind


@dataclass(frozen=True, slots=True, kw_only=True)
class CredentialError(DomainError):
    """Base credential resolution error.

    Attributes:
        account_identifier: Tenant account the lookup was made for.
    """

    account_identifier: str

    @property
    def kind(self) -> ProviderErrorKind:
        """Normalized failure kind."""
        return ProviderErrorKind.INTERNAL


@dataclass(frozen=True, slots=True, kw_only=True)
class CredentialNotFoundError(CredentialError):
    """No usable credential for the account.

    Covers both a missing record (CREDENTIAL_NOT_FOUND) and a record lacking
    baseUrl or apiKey (CREDENTIAL_INVALID).
    """

    @property
    def kind(self) -> ProviderErrorKind:
        return ProviderErrorKind.NOT_FOUND


@dataclass(frozen=True, slots=True, kw_only=True)
class CredentialExpiredError(CredentialError):
    """Stored credential is past its expiry."""

    @property
    def kind(self) -> ProviderErrorKind:
        return ProviderErrorKind.FORBIDDEN
