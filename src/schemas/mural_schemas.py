"""Mural proxy request and response schemas.

Pydantic schemas for the /mural endpoints. Upstream payloads are camelCase
and mostly passed through, so request schemas validate the fields the
proxy relies on and keep any extra fields for forwarding.

Reference:
    - https://developers.muralpay.com/reference
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MuralPayload(BaseModel):
    """Base for camelCase payloads forwarded to Mural.

    Unknown fields are kept so new upstream options pass through untouched.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_upstream(self) -> dict[str, Any]:
        """Serialize for the upstream API (camelCase, None fields dropped)."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Request Schemas
# =============================================================================


class CreateAccountRequest(MuralPayload):
    """Create account request.

    Attributes:
        name: Account name.
        description: Optional account description.
    """

    name: str = Field(..., min_length=1, description="Account name")
    description: str | None = Field(None, description="Account description")


class CreateOrganizationRequest(MuralPayload):
    """Create organization request (individual or business).

    Attributes:
        type: Organization type.
        first_name: Individual's first name.
        last_name: Individual's last name.
        business_name: Business legal name (business organizations).
    """

    type: Literal["individual", "business"] = Field(
        ..., description="Organization type"
    )
    first_name: str | None = Field(None, description="First name (individual)")
    last_name: str | None = Field(None, description="Last name (individual)")
    business_name: str | None = Field(None, description="Business name (business)")


class CreatePayoutRequest(MuralPayload):
    """Create payout request.

    Attributes:
        source_account_id: Mural account the funds leave from.
        memo: Optional memo shown on the payout request.
        payouts: Individual payouts (amount, recipient, rail details).
    """

    source_account_id: str = Field(..., description="Source account ID")
    memo: str | None = Field(None, description="Payout memo")
    payouts: list[dict[str, Any]] = Field(
        ..., min_length=1, description="Individual payouts"
    )


class PayoutSearchRequest(MuralPayload):
    """Payout request search (one page).

    Attributes:
        filter: Upstream payout status filter.
        limit: Page size.
        next_id: Cursor from the previous page.
    """

    filter: dict[str, Any] = Field(
        default_factory=dict, description="Payout status filter"
    )
    limit: int | None = Field(None, ge=1, description="Page size")
    next_id: str | None = Field(None, description="Pagination cursor")


class OrganizationSearchRequest(MuralPayload):
    """Organization search (one page).

    Attributes:
        filter: Upstream organization filter.
        limit: Page size.
        next_id: Cursor from the previous page.
    """

    filter: dict[str, Any] | None = Field(None, description="Organization filter")
    limit: int | None = Field(None, ge=1, description="Page size")
    next_id: str | None = Field(None, description="Pagination cursor")


# =============================================================================
# Response Schemas
# =============================================================================


class ProviderCacheResponse(BaseModel):
    """Provider cache state after an invalidation.

    Attributes:
        invalidated: Account identifier invalidated, or "all".
        cached_accounts: Accounts still holding a cached client.
    """

    invalidated: str = Field(..., description="Invalidated account or 'all'")
    cached_accounts: list[str] = Field(
        default_factory=list, description="Accounts with a cached client"
    )
