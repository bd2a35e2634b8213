"""IntegrationCredential repository protocol.

Defines the persistence contract for per-tenant provider credentials.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.integration_credential import IntegrationCredential


class IntegrationCredentialRepository(Protocol):
    """Protocol for integration credential persistence operations.

    Defines the contract for storing and retrieving credential records.
    Infrastructure layer provides concrete implementations (e.g., PostgreSQL).

    **Design Principles**:
    - Read methods return domain entities, not database models
    - (provider_type, account_identifier) is unique; the store enforces it
    - Credential payloads are opaque maps and stored as JSON
    """

    async def find_by_id(self, credential_id: UUID) -> IntegrationCredential | None:
        """Find credential by ID.

        Args:
            credential_id: Unique credential identifier.

        Returns:
            IntegrationCredential if found, None otherwise.
        """
        ...

    async def find_one(
        self,
        *,
        provider_type: str,
        account_identifier: str,
    ) -> IntegrationCredential | None:
        """Find the credential for a provider and tenant.

        Args:
            provider_type: Provider discriminator (e.g., "mural").
            account_identifier: Tenant key.

        Returns:
            IntegrationCredential if found, None otherwise.
        """
        ...

    async def list_all(
        self,
        *,
        provider_type: str | None = None,
        account_identifier: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[IntegrationCredential]:
        """List credentials, optionally filtered, newest first.

        Args:
            provider_type: Only return this provider's credentials.
            account_identifier: Only return this tenant's credentials.
            limit: Maximum records to return (None for all).
            offset: Records to skip.

        Returns:
            List of matching credentials.
        """
        ...

    async def count(
        self,
        *,
        provider_type: str | None = None,
        account_identifier: str | None = None,
    ) -> int:
        """Count credentials matching the optional filters."""
        ...

    async def save(self, credential: IntegrationCredential) -> None:
        """Create or update a credential.

        Args:
            credential: Credential entity to persist.
        """
        ...

    async def delete(self, credential_id: UUID) -> bool:
        """Delete credential by ID.

        Args:
            credential_id: Credential identifier.

        Returns:
            bool: True if a record was deleted, False if none existed.
        """
        ...
