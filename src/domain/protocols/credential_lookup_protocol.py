"""Credential lookup protocol.

The single query the provider factory needs from the credential store.
Implemented by the database-backed lookup in infrastructure/persistence and
by in-memory doubles in tests.
"""

from typing import Protocol

from src.domain.entities.integration_credential import IntegrationCredential


class CredentialLookupProtocol(Protocol):
    """Find-one-by(provider_type, account_identifier) over stored credentials.

    Example:
        >>> lookup: CredentialLookupProtocol = ...
        >>> credential = await lookup.find_one(
        ...     provider_type="mural", account_identifier="acme"
        ... )
    """

    async def find_one(
        self,
        *,
        provider_type: str,
        account_identifier: str,
    ) -> IntegrationCredential | None:
        """Return the unique credential for the pair, or None."""
        ...
