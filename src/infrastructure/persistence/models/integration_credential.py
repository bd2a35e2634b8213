"""IntegrationCredential database model.

This module defines the IntegrationCredential model: one row per
(provider_type, account_identifier) holding the upstream credential map.

Reference:
    - src/domain/entities/integration_credential.py
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class IntegrationCredential(BaseMutableModel):
    """Stored upstream credentials for one tenant and provider.

    Fields:
        id: UUID primary key (from BaseMutableModel)
        created_at: Timestamp when stored (from BaseMutableModel)
        updated_at: Timestamp when last modified (from BaseMutableModel)
        provider_type: Provider discriminator (e.g., "mural")
        account_identifier: Tenant key
        credentials: Credential map (baseUrl, apiKey, transferApiKey, ...)
        expiry_date: Optional expiry; past dates make the credential unusable
        version: Free-form version label
        automatic_update: Whether the credential is rotated automatically
        created_by: Identity (token subject) that created the record
        updated_by: Identity (token subject) that last modified the record

    Indexes:
        - idx_integration_credentials_provider_account:
          (provider_type, account_identifier) UNIQUE - resolution key
    """

    __tablename__ = "integration_credentials"

    provider_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Provider discriminator (e.g., 'mural')",
    )

    account_identifier: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Tenant key, unique together with provider_type",
    )

    credentials: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Credential map (baseUrl, apiKey, transferApiKey, provider extras)",
    )

    expiry_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Credential expiry; NULL never expires",
    )

    version: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    automatic_update: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    updated_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        Index(
            "idx_integration_credentials_provider_account",
            "provider_type",
            "account_identifier",
            unique=True,
        ),
    )

    def __repr__(self) -> str:
        """String representation for debugging (credential values omitted).

        Returns:
            str: String showing provider type and account identifier.
        """
        return (
            f"<IntegrationCredential(provider_type={self.provider_type!r}, "
            f"account_identifier={self.account_identifier!r})>"
        )
