"""IntegrationCredential repository implementation.

SQLAlchemy implementation of the IntegrationCredentialRepository protocol.
Maps between IntegrationCredential domain entity and database model.

Reference:
    - src/domain/protocols/integration_credential_repository.py
"""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.integration_credential import IntegrationCredential
from src.infrastructure.persistence.models.integration_credential import (
    IntegrationCredential as IntegrationCredentialModel,
)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on round trip
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class IntegrationCredentialRepository:
    """SQLAlchemy implementation of IntegrationCredentialRepository protocol.

    Handles persistence of IntegrationCredential entities using SQLAlchemy
    async sessions.

    **Implementation Notes**:
    - Maps between domain entity (dataclass) and database model (SQLAlchemy)
    - Uses select() for queries (SQLAlchemy 2.0 style)
    - Uniqueness of (provider_type, account_identifier) is enforced by the
      database index, not here
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def find_by_id(self, credential_id: UUID) -> IntegrationCredential | None:
        """Find credential by ID.

        Args:
            credential_id: Unique credential identifier.

        Returns:
            IntegrationCredential entity if found, None otherwise.
        """
        stmt = select(IntegrationCredentialModel).where(
            IntegrationCredentialModel.id == credential_id
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

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
            IntegrationCredential entity if found, None otherwise.
        """
        stmt = select(IntegrationCredentialModel).where(
            IntegrationCredentialModel.provider_type == provider_type,
            IntegrationCredentialModel.account_identifier == account_identifier,
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()

        if model is None:
            return None

        return self._to_entity(model)

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
        stmt = self._filtered(
            select(IntegrationCredentialModel),
            provider_type=provider_type,
            account_identifier=account_identifier,
        ).order_by(IntegrationCredentialModel.created_at.desc())

        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(m) for m in models]

    async def count(
        self,
        *,
        provider_type: str | None = None,
        account_identifier: str | None = None,
    ) -> int:
        """Count credentials matching the optional filters.

        Returns:
            int: Number of matching records.
        """
        stmt = self._filtered(
            select(func.count()).select_from(IntegrationCredentialModel),
            provider_type=provider_type,
            account_identifier=account_identifier,
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def save(self, credential: IntegrationCredential) -> None:
        """Save a credential (create or update).

        Args:
            credential: IntegrationCredential entity to save.
        """
        stmt = select(IntegrationCredentialModel).where(
            IntegrationCredentialModel.id == credential.id
        )
        result = await self._session.execute(stmt)
        existing = result.scalar_one_or_none()

        if existing is None:
            model = self._to_model(credential)
            self._session.add(model)
        else:
            existing.provider_type = credential.provider_type
            existing.account_identifier = credential.account_identifier
            existing.credentials = dict(credential.credentials)
            existing.expiry_date = credential.expiry_date
            existing.version = credential.version
            existing.automatic_update = credential.automatic_update
            existing.updated_by = credential.updated_by
            existing.updated_at = credential.updated_at

        await self._session.flush()

    async def delete(self, credential_id: UUID) -> bool:
        """Delete credential by ID.

        Args:
            credential_id: Credential identifier.

        Returns:
            bool: True if a record was deleted, False if none existed.
        """
        stmt = delete(IntegrationCredentialModel).where(
            IntegrationCredentialModel.id == credential_id
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    @staticmethod
    def _filtered(
        stmt: Select[Any],
        *,
        provider_type: str | None,
        account_identifier: str | None,
    ) -> Select[Any]:
        if provider_type is not None:
            stmt = stmt.where(IntegrationCredentialModel.provider_type == provider_type)
        if account_identifier is not None:
            stmt = stmt.where(
                IntegrationCredentialModel.account_identifier == account_identifier
            )
        return stmt

    def _to_entity(self, model: IntegrationCredentialModel) -> IntegrationCredential:
        """Map database model to domain entity.

        Args:
            model: Database model.

        Returns:
            Domain entity.
        """
        return IntegrationCredential(
            id=model.id,
            provider_type=model.provider_type,
            account_identifier=model.account_identifier,
            credentials=dict(model.credentials or {}),
            expiry_date=_as_utc(model.expiry_date),
            version=model.version,
            automatic_update=model.automatic_update,
            created_by=model.created_by,
            updated_by=model.updated_by,
            created_at=_as_utc(model.created_at) or datetime.now(UTC),
            updated_at=_as_utc(model.updated_at) or datetime.now(UTC),
        )

    def _to_model(self, entity: IntegrationCredential) -> IntegrationCredentialModel:
        """Map domain entity to database model.

        Args:
            entity: Domain entity.

        Returns:
            Database model.
        """
        return IntegrationCredentialModel(
            id=entity.id,
            provider_type=entity.provider_type,
            account_identifier=entity.account_identifier,
            credentials=dict(entity.credentials),
            expiry_date=entity.expiry_date,
            version=entity.version,
            automatic_update=entity.automatic_update,
            created_by=entity.created_by,
            updated_by=entity.updated_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
