"""Database-backed credential lookup for the provider factory.

The provider factory outlives any single request, so it cannot hold a
request-scoped session. This adapter opens a short session per lookup.
"""

import structlog

from src.domain.entities.integration_credential import IntegrationCredential
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.repositories import IntegrationCredentialRepository

logger = structlog.get_logger(__name__)


class DatabaseCredentialLookup:
    """CredentialLookupProtocol implementation over the credential table.

    Example:
        >>> lookup = DatabaseCredentialLookup(database)
        >>> factory = ProviderFactory(lookup=lookup)
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    async def find_one(
        self,
        *,
        provider_type: str,
        account_identifier: str,
    ) -> IntegrationCredential | None:
        """Return the unique credential for the pair, or None."""
        async with self._database.get_session() as session:
            repository = IntegrationCredentialRepository(session)
            credential = await repository.find_one(
                provider_type=provider_type,
                account_identifier=account_identifier,
            )

        logger.debug(
            "credential_lookup_completed",
            provider_type=provider_type,
            account_identifier=account_identifier,
            found=credential is not None,
        )
        return credential
