"""Mural proxy resource handlers.

Handler functions for the tenant-scoped Mural Pay endpoints. Each handler
resolves the tenant's MuralProvider through the ProviderFactory, runs one
provider operation under the rate-limit retry policy and either returns the
upstream JSON or an RFC 9457 error.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    list_accounts                  - List accounts
    get_account                    - Get one account
    create_account                 - Create an account
    get_organization               - Get one organization
    create_organization            - Create an organization
    search_organizations           - Search organizations (one page)
    get_organization_kyc_link      - KYC onboarding link
    get_organization_tos_link      - Terms-of-service link
    create_payout_request          - Create a payout request
    get_payout_request             - Get one payout request
    search_payout_requests         - Search payout requests (one page)
    get_bank_details               - Bank details per currency and rail
    get_payout_fees_for_token_amount - Fee quote for token amounts
    get_payout_fees_for_fiat_amount  - Fee quote for fiat amounts
    execute_payout_request         - Execute a payout request
    cancel_payout_request          - Cancel a payout request
    search_transactions            - Search an account's transactions
    invalidate_provider_cache      - Drop cached provider clients
"""

from collections.abc import Awaitable, Callable
from typing import Annotated, Any

from fastapi import Body, Depends, Header, Path, Query, Request
from fastapi.responses import JSONResponse

from src.application.errors import to_application_error
from src.application.services import RateLimitRetryPolicy, call_with_rate_limit_retry
from src.core.constants import ON_BEHALF_OF_HEADER
from src.core.container import get_provider_factory, get_retry_policy
from src.core.result import Failure, Result
from src.domain.errors import ProviderError
from src.infrastructure.providers.mural import MuralProvider
from src.infrastructure.providers.provider_factory import ProviderFactory
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.mural_schemas import (
    CreateAccountRequest,
    CreateOrganizationRequest,
    CreatePayoutRequest,
    OrganizationSearchRequest,
    PayoutSearchRequest,
    ProviderCacheResponse,
)

AccountIdentifier = Annotated[
    str,
    Path(min_length=1, description="Tenant account identifier"),
]
OnBehalfOf = Annotated[
    str | None,
    Header(alias=ON_BEHALF_OF_HEADER, description="Organization to act for"),
]
Factory = Annotated[ProviderFactory, Depends(get_provider_factory)]
RetryPolicy = Annotated[RateLimitRetryPolicy, Depends(get_retry_policy)]

ProviderCall = Callable[[MuralProvider], Awaitable[Result[Any, ProviderError]]]


async def _proxy(
    request: Request,
    factory: ProviderFactory,
    policy: RateLimitRetryPolicy,
    account_identifier: str,
    operation_name: str,
    call: ProviderCall,
) -> Any:
    """Resolve the tenant's provider and run one operation with retries.

    Returns:
        The upstream value on success, or a JSONResponse with RFC 9457
        error details when credential resolution or the call fails.
    """
    resolved = await factory.resolve(account_identifier)
    if isinstance(resolved, Failure):
        return _error_response(request, resolved.error)

    provider = resolved.value
    result = await call_with_rate_limit_retry(
        lambda: call(provider),
        policy,
        operation_name=operation_name,
    )
    if isinstance(result, Failure):
        return _error_response(request, result.error)

    return result.value


def _error_response(request: Request, error: Any) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=to_application_error(error),
        request=request,
        trace_id=get_trace_id() or "",
    )


# =============================================================================
# Accounts
# =============================================================================


async def list_accounts(
    request: Request,
    account_identifier: AccountIdentifier,
    factory: Factory,
    policy: RetryPolicy,
    on_behalf_of: OnBehalfOf = None,
) -> Any:
    """List the tenant's Mural accounts.

    GET /api/v1/mural/{account_identifier}/accounts → 200 OK

    Returns:
        ``{"accounts": [...]}`` (a bare upstream list is wrapped).
        JSONResponse with RFC 9457 error on failure.
    """
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "get_accounts",
        lambda provider: provider.get_accounts(on_behalf_of),
    )


async def get_account(
    request: Request,
    account_identifier: AccountIdentifier,
    account_id: Annotated[str, Path(description="Mural account ID")],
    factory: Factory,
    policy: RetryPolicy,
    on_behalf_of: OnBehalfOf = None,
) -> Any:
    """Get one Mural account.

    GET /api/v1/mural/{account_identifier}/accounts/{account_id} → 200 OK
    """
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "get_account",
        lambda provider: provider.get_account(account_id, on_behalf_of),
    )


async def create_account(
    request: Request,
    account_identifier: AccountIdentifier,
    data: CreateAccountRequest,
    factory: Factory,
    policy: RetryPolicy,
    on_behalf_of: OnBehalfOf = None,
) -> Any:
    """Create a Mural account.

    POST /api/v1/mural/{account_identifier}/accounts → 201 Created
    """
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "create_account",
        lambda provider: provider.create_account(
            data.name,
            description=data.description,
            on_behalf_of=on_behalf_of,
        ),
    )


# =============================================================================
# Organizations
# =============================================================================


async def get_organization(
    request: Request,
    account_identifier: AccountIdentifier,
    organization_id: Annotated[str, Path(description="Organization ID")],
    factory: Factory,
    policy: RetryPolicy,
) -> Any:
    """Get one organization.

    GET /api/v1/mural/{account_identifier}/organizations/{organization_id} → 200 OK
    """
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "get_organization",
        lambda provider: provider.get_organization(organization_id),
    )


async def create_organization(
    request: Request,
    account_identifier: AccountIdentifier,
    data: CreateOrganizationRequest,
    factory: Factory,
    policy: RetryPolicy,
) -> Any:
    """Create an individual or business organization.

    POST /api/v1/mural/{account_identifier}/organizations → 201 Created
    """
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "create_organization",
        lambda provider: provider.create_organization(data.to_upstream()),
    )


async def search_organizations(
    request: Request,
    account_identifier: AccountIdentifier,
    factory: Factory,
    policy: RetryPolicy,
    data: OrganizationSearchRequest | None = None,
) -> Any:
    """Search organizations (one page).

    POST /api/v1/mural/{account_identifier}/organizations/search → 200 OK
    """
    search = data or OrganizationSearchRequest()
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "search_organizations",
        lambda provider: provider.search_organizations(
            search.filter,
            limit=search.limit,
            next_id=search.next_id,
        ),
    )


async def get_organization_kyc_link(
    request: Request,
    account_identifier: AccountIdentifier,
    organization_id: Annotated[str, Path(description="Organization ID")],
    factory: Factory,
    policy: RetryPolicy,
) -> Any:
    """GET /api/v1/mural/{account_identifier}/organizations/{organization_id}/kyc-link"""
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "get_organization_kyc_link",
        lambda provider: provider.get_organization_kyc_link(organization_id),
    )


async def get_organization_tos_link(
    request: Request,
    account_identifier: AccountIdentifier,
    organization_id: Annotated[str, Path(description="Organization ID")],
    factory: Factory,
    policy: RetryPolicy,
) -> Any:
    """GET /api/v1/mural/{account_identifier}/organizations/{organization_id}/tos-link"""
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "get_organization_tos_link",
        lambda provider: provider.get_organization_tos_link(organization_id),
    )


# =============================================================================
# Payouts
# =============================================================================


async def create_payout_request(
    request: Request,
    account_identifier: AccountIdentifier,
    data: CreatePayoutRequest,
    factory: Factory,
    policy: RetryPolicy,
    on_behalf_of: OnBehalfOf = None,
) -> Any:
    """Create a payout request.

    POST /api/v1/mural/{account_identifier}/payouts/payout → 201 Created

    Returns:
        The created payout request (first element of the upstream
        ``payouts`` list when present).
    """
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "create_payout_request",
        lambda provider: provider.create_payout_request(
            data.to_upstream(),
            on_behalf_of=on_behalf_of,
        ),
    )


async def get_payout_request(
    request: Request,
    account_identifier: AccountIdentifier,
    payout_request_id: Annotated[str, Path(description="Payout request ID")],
    factory: Factory,
    policy: RetryPolicy,
    on_behalf_of: OnBehalfOf = None,
) -> Any:
    """GET /api/v1/mural/{account_identifier}/payouts/payout/{payout_request_id}"""
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "get_payout_request",
        lambda provider: provider.get_payout_request(
            payout_request_id,
            on_behalf_of=on_behalf_of,
        ),
    )


async def search_payout_requests(
    request: Request,
    account_identifier: AccountIdentifier,
    factory: Factory,
    policy: RetryPolicy,
    data: PayoutSearchRequest | None = None,
    on_behalf_of: OnBehalfOf = None,
) -> Any:
    """Search payout requests (one page).

    POST /api/v1/mural/{account_identifier}/payouts/search → 200 OK
    """
    search = data or PayoutSearchRequest()
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "search_payout_requests",
        lambda provider: provider.search_payout_requests(
            search.filter,
            limit=search.limit,
            next_id=search.next_id,
            on_behalf_of=on_behalf_of,
        ),
    )


async def get_bank_details(
    request: Request,
    account_identifier: AccountIdentifier,
    factory: Factory,
    policy: RetryPolicy,
    currency_rail_codes: Annotated[
        list[str],
        Query(
            alias="fiatCurrencyAndRail",
            min_length=1,
            description="Fiat currency and rail codes (repeatable)",
        ),
    ],
) -> Any:
    """Bank details for fiat currency and rail codes.

    GET /api/v1/mural/{account_identifier}/payouts/bank-details
        ?fiatCurrencyAndRail=usd&fiatCurrencyAndRail=cop → 200 OK
    """
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "get_bank_details",
        lambda provider: provider.get_bank_details(currency_rail_codes),
    )


async def get_payout_fees_for_token_amount(
    request: Request,
    account_identifier: AccountIdentifier,
    fee_requests: Annotated[list[dict[str, Any]], Body(min_length=1)],
    factory: Factory,
    policy: RetryPolicy,
) -> Any:
    """POST /api/v1/mural/{account_identifier}/payouts/fees/token-to-fiat"""
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "get_payout_fees_for_token_amount",
        lambda provider: provider.get_payout_fees_for_token_amount(fee_requests),
    )


async def get_payout_fees_for_fiat_amount(
    request: Request,
    account_identifier: AccountIdentifier,
    fee_requests: Annotated[list[dict[str, Any]], Body(min_length=1)],
    factory: Factory,
    policy: RetryPolicy,
) -> Any:
    """POST /api/v1/mural/{account_identifier}/payouts/fees/fiat-to-token"""
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "get_payout_fees_for_fiat_amount",
        lambda provider: provider.get_payout_fees_for_fiat_amount(fee_requests),
    )


async def execute_payout_request(
    request: Request,
    account_identifier: AccountIdentifier,
    payout_request_id: Annotated[str, Path(description="Payout request ID")],
    factory: Factory,
    policy: RetryPolicy,
    on_behalf_of: OnBehalfOf = None,
) -> Any:
    """Execute a payout request (moves money).

    POST /api/v1/mural/{account_identifier}/payouts/payout/{payout_request_id}/execute

    Requires a transfer API key on the tenant's credentials; without one the
    request fails with 500 before anything is sent upstream.
    """
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "execute_payout_request",
        lambda provider: provider.execute_payout_request(
            payout_request_id,
            on_behalf_of,
        ),
    )


async def cancel_payout_request(
    request: Request,
    account_identifier: AccountIdentifier,
    payout_request_id: Annotated[str, Path(description="Payout request ID")],
    factory: Factory,
    policy: RetryPolicy,
    on_behalf_of: OnBehalfOf = None,
) -> Any:
    """POST /api/v1/mural/{account_identifier}/payouts/payout/{payout_request_id}/cancel"""
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "cancel_payout_request",
        lambda provider: provider.cancel_payout_request(
            payout_request_id,
            on_behalf_of=on_behalf_of,
        ),
    )


# =============================================================================
# Transactions
# =============================================================================


async def search_transactions(
    request: Request,
    account_identifier: AccountIdentifier,
    account_id: Annotated[str, Path(description="Mural account ID")],
    factory: Factory,
    policy: RetryPolicy,
    limit: Annotated[int | None, Query(ge=1, description="Page size")] = None,
    next_id: Annotated[
        str | None,
        Query(alias="nextId", description="Pagination cursor"),
    ] = None,
    on_behalf_of: OnBehalfOf = None,
) -> Any:
    """Search one account's transactions (one page).

    POST /api/v1/mural/{account_identifier}/transactions/search/account/{account_id}
    """
    return await _proxy(
        request,
        factory,
        policy,
        account_identifier,
        "search_transactions",
        lambda provider: provider.search_transactions(
            account_id,
            limit=limit,
            next_id=next_id,
            on_behalf_of=on_behalf_of,
        ),
    )


# =============================================================================
# Provider cache
# =============================================================================


async def invalidate_provider_cache(
    factory: Factory,
    account_identifier: Annotated[
        str | None,
        Query(description="Account to invalidate (all accounts when omitted)"),
    ] = None,
) -> ProviderCacheResponse:
    """Drop cached provider clients so credentials are re-read.

    DELETE /api/v1/mural/provider-cache → 200 OK
    """
    factory.invalidate(account_identifier)
    return ProviderCacheResponse(
        invalidated=account_identifier or "all",
        cached_accounts=factory.cached_accounts(),
    )
