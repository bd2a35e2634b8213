"""IntegrationCredential domain entity.

Holds one tenant's credentials for one upstream provider. The credential
payload is an open map so provider-specific keys survive round trips; the
accessors below expose the keys the Mural client needs.

Credential payload keys (camelCase, as stored):
    baseUrl: Upstream API base URL (required).
    apiKey: Bearer API key (required).
    transferApiKey: Secondary key for money movement (optional).
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID


@dataclass
class IntegrationCredential:
    """Per-tenant upstream credential record.

    Audit fields (created_by, updated_by, timestamps) are informational and
    never consulted by provider resolution.

    Attributes:
        id: Unique credential identifier.
        provider_type: Provider discriminator (e.g., "mural").
        account_identifier: Tenant key, unique together with provider_type.
        credentials: Open credential map (baseUrl, apiKey, transferApiKey, ...).
        expiry_date: When set and in the past, the credential is unusable.
        version: Free-form version label of the credential set.
        automatic_update: Whether the credential is rotated automatically.
        created_by: Identity that created the record.
        updated_by: Identity that last modified the record.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.

    Example:
        >>> credential = IntegrationCredential(
        ...     id=uuid4(),
        ...     provider_type="mural",
        ...     account_identifier="acme",
        ...     credentials={"baseUrl": "https://api.example.com", "apiKey": "k1"},
        ... )
        >>> credential.has_required_fields()
        True
    """

    id: UUID
    provider_type: str
    account_identifier: str
    credentials: dict[str, Any] = field(default_factory=dict)
    expiry_date: datetime | None = None
    version: str | None = None
    automatic_update: bool = False
    created_by: str | None = None
    updated_by: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate credential after initialization.

        Raises:
            ValueError: If identity fields are empty.
        """
        if not self.provider_type:
            raise ValueError("Provider type cannot be empty")

        if not self.account_identifier:
            raise ValueError("Account identifier cannot be empty")

    # -------------------------------------------------------------------------
    # Credential accessors
    # -------------------------------------------------------------------------

    @property
    def base_url(self) -> str | None:
        """Upstream API base URL, or None when absent."""
        return self.credentials.get("baseUrl") or None

    @property
    def api_key(self) -> str | None:
        """Bearer API key, or None when absent."""
        return self.credentials.get("apiKey") or None

    @property
    def transfer_api_key(self) -> str | None:
        """Transfer API key, or None when absent or empty."""
        return self.credentials.get("transferApiKey") or None

    def has_required_fields(self) -> bool:
        """Check that both baseUrl and apiKey are present and non-empty."""
        return bool(self.base_url and self.api_key)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the credential is past its expiry date.

        Naive expiry dates are interpreted as UTC.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if expiry_date is set and earlier than now.
        """
        if self.expiry_date is None:
            return False

        reference = now or datetime.now(UTC)
        expiry = self.expiry_date
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return expiry < reference

    def __repr__(self) -> str:
        """Return repr for debugging (credential values are never included).

        Returns:
            str: String representation.
        """
        return (
            f"IntegrationCredential(provider_type={self.provider_type!r}, "
            f"account_identifier={self.account_identifier!r})"
        )
