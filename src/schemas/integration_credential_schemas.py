"""Integration credential request and response schemas.

Pydantic schemas for the /integration-credentials endpoints. Field names
are camelCase on the wire to match the admin frontend.

Secret values (apiKey, transferApiKey) are masked in every response.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.entities.integration_credential import IntegrationCredential

_SECRET_KEYS = frozenset({"apiKey", "transferApiKey"})


def mask_secret(value: Any) -> Any:
    """Mask a secret, keeping the last four characters.

    Example:
        >>> mask_secret("sk_live_12345678")
        '****5678'
    """
    if not isinstance(value, str) or not value:
        return value
    return f"****{value[-4:]}" if len(value) > 4 else "****"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Request Schemas
# =============================================================================


class IntegrationCredentialCreateRequest(_CamelModel):
    """Create integration credential request.

    Attributes:
        provider_type: Provider discriminator (e.g., "mural").
        account_identifier: Tenant key.
        credentials: Credential map (baseUrl, apiKey, transferApiKey, ...).
        expiry_date: Optional expiry.
        version: Optional version label.
        automatic_update: Whether the credential is rotated automatically.
    """

    provider_type: str = Field(..., min_length=1, examples=["mural"])
    account_identifier: str = Field(..., min_length=1, examples=["acme"])
    credentials: dict[str, Any] = Field(
        ...,
        examples=[{"baseUrl": "https://api.muralpay.com", "apiKey": "..."}],
    )
    expiry_date: datetime | None = None
    version: str | None = None
    automatic_update: bool = False


class IntegrationCredentialUpdateRequest(_CamelModel):
    """Partial update (PATCH) of an integration credential.

    Only fields present in the request body are applied.
    """

    provider_type: str | None = Field(None, min_length=1)
    account_identifier: str | None = Field(None, min_length=1)
    credentials: dict[str, Any] | None = None
    expiry_date: datetime | None = None
    version: str | None = None
    automatic_update: bool | None = None


# =============================================================================
# Response Schemas
# =============================================================================


class IntegrationCredentialResponse(_CamelModel):
    """Single integration credential (secrets masked)."""

    id: UUID
    provider_type: str
    account_identifier: str
    credentials: dict[str, Any]
    expiry_date: datetime | None = None
    version: str | None = None
    automatic_update: bool = False
    created_by: str | None = None
    updated_by: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, credential: IntegrationCredential
    ) -> "IntegrationCredentialResponse":
        """Convert domain entity to response schema, masking secrets.

        Args:
            credential: IntegrationCredential entity.

        Returns:
            IntegrationCredentialResponse for API response.
        """
        return cls(
            id=credential.id,
            provider_type=credential.provider_type,
            account_identifier=credential.account_identifier,
            credentials={
                key: mask_secret(value) if key in _SECRET_KEYS else value
                for key, value in credential.credentials.items()
            },
            expiry_date=credential.expiry_date,
            version=credential.version,
            automatic_update=credential.automatic_update,
            created_by=credential.created_by,
            updated_by=credential.updated_by,
            created_at=credential.created_at,
            updated_at=credential.updated_at,
        )


class CountResponse(BaseModel):
    """Record count."""

    count: int = Field(..., ge=0)
