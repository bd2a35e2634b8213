"""API Route Registry - Single Source of Truth for all routes.

ROUTE_REGISTRY is the authoritative list of API endpoints. Paths are
relative to the /api/v1 prefix added by the v1 router.

Registry structure:
    - Mural proxy endpoints, scoped by tenant account identifier
    - Provider cache administration
    - Integration credential CRUD

Usage:
    from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY
    from src.presentation.routers.api.v1.routes.generator import register_routes_from_registry

    router = APIRouter(prefix="/api/v1")
    register_routes_from_registry(router, ROUTE_REGISTRY)
"""

from src.presentation.routers.api.v1 import integration_credentials, mural
from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    ErrorSpec,
    HTTPMethod,
    IdempotencyLevel,
    RouteMetadata,
)
from src.schemas.integration_credential_schemas import (
    CountResponse,
    IntegrationCredentialResponse,
)
from src.schemas.mural_schemas import ProviderCacheResponse

_AUTHENTICATED = AuthPolicy(level=AuthLevel.AUTHENTICATED)

# Errors any proxied Mural call can produce
_PROXY_ERRORS = [
    ErrorSpec(status=400, description="Rejected by Mural"),
    ErrorSpec(status=403, description="Tenant credentials expired"),
    ErrorSpec(status=404, description="No credentials for account, or resource not found"),
    ErrorSpec(status=429, description="Mural rate limit exceeded (see Retry-After)"),
    ErrorSpec(status=500, description="Unexpected Mural response"),
    ErrorSpec(status=503, description="Mural unreachable or timed out"),
]

_MURAL = "/mural/{account_identifier}"


def _proxy_route(
    method: HTTPMethod,
    path: str,
    handler,
    *,
    resource: str,
    tag: str,
    summary: str,
    status_code: int = 200,
    description: str | None = None,
) -> RouteMetadata:
    if method is HTTPMethod.GET:
        idempotency = IdempotencyLevel.SAFE
    else:
        idempotency = IdempotencyLevel.NON_IDEMPOTENT
    return RouteMetadata(
        method=method,
        path=f"{_MURAL}{path}",
        handler=handler,
        resource=resource,
        tags=[tag],
        summary=summary,
        description=description,
        operation_id=handler.__name__,
        status_code=status_code,
        errors=_PROXY_ERRORS,
        idempotency=idempotency,
        auth_policy=_AUTHENTICATED,
    )


ROUTE_REGISTRY: list[RouteMetadata] = [
    # =========================================================================
    # Mural accounts
    # =========================================================================
    _proxy_route(
        HTTPMethod.GET,
        "/accounts",
        mural.list_accounts,
        resource="mural_accounts",
        tag="Mural Accounts",
        summary="List accounts",
    ),
    _proxy_route(
        HTTPMethod.GET,
        "/accounts/{account_id}",
        mural.get_account,
        resource="mural_accounts",
        tag="Mural Accounts",
        summary="Get account",
    ),
    _proxy_route(
        HTTPMethod.POST,
        "/accounts",
        mural.create_account,
        resource="mural_accounts",
        tag="Mural Accounts",
        summary="Create account",
        status_code=201,
    ),
    # =========================================================================
    # Mural organizations
    # Static segments are registered before {organization_id} routes.
    # =========================================================================
    _proxy_route(
        HTTPMethod.POST,
        "/organizations/search",
        mural.search_organizations,
        resource="mural_organizations",
        tag="Mural Organizations",
        summary="Search organizations",
    ),
    _proxy_route(
        HTTPMethod.POST,
        "/organizations",
        mural.create_organization,
        resource="mural_organizations",
        tag="Mural Organizations",
        summary="Create organization",
        status_code=201,
    ),
    _proxy_route(
        HTTPMethod.GET,
        "/organizations/{organization_id}",
        mural.get_organization,
        resource="mural_organizations",
        tag="Mural Organizations",
        summary="Get organization",
    ),
    _proxy_route(
        HTTPMethod.GET,
        "/organizations/{organization_id}/kyc-link",
        mural.get_organization_kyc_link,
        resource="mural_organizations",
        tag="Mural Organizations",
        summary="Get KYC link",
    ),
    _proxy_route(
        HTTPMethod.GET,
        "/organizations/{organization_id}/tos-link",
        mural.get_organization_tos_link,
        resource="mural_organizations",
        tag="Mural Organizations",
        summary="Get terms-of-service link",
    ),
    # =========================================================================
    # Mural payouts
    # =========================================================================
    _proxy_route(
        HTTPMethod.POST,
        "/payouts/payout",
        mural.create_payout_request,
        resource="mural_payouts",
        tag="Mural Payouts",
        summary="Create payout request",
        status_code=201,
    ),
    _proxy_route(
        HTTPMethod.POST,
        "/payouts/search",
        mural.search_payout_requests,
        resource="mural_payouts",
        tag="Mural Payouts",
        summary="Search payout requests",
    ),
    _proxy_route(
        HTTPMethod.GET,
        "/payouts/bank-details",
        mural.get_bank_details,
        resource="mural_payouts",
        tag="Mural Payouts",
        summary="Get bank details",
    ),
    _proxy_route(
        HTTPMethod.POST,
        "/payouts/fees/token-to-fiat",
        mural.get_payout_fees_for_token_amount,
        resource="mural_payouts",
        tag="Mural Payouts",
        summary="Quote fees for token amounts",
    ),
    _proxy_route(
        HTTPMethod.POST,
        "/payouts/fees/fiat-to-token",
        mural.get_payout_fees_for_fiat_amount,
        resource="mural_payouts",
        tag="Mural Payouts",
        summary="Quote fees for fiat amounts",
    ),
    _proxy_route(
        HTTPMethod.GET,
        "/payouts/payout/{payout_request_id}",
        mural.get_payout_request,
        resource="mural_payouts",
        tag="Mural Payouts",
        summary="Get payout request",
    ),
    _proxy_route(
        HTTPMethod.POST,
        "/payouts/payout/{payout_request_id}/execute",
        mural.execute_payout_request,
        resource="mural_payouts",
        tag="Mural Payouts",
        summary="Execute payout request",
        description="Moves money. Requires a transfer API key on the tenant's credentials.",
    ),
    _proxy_route(
        HTTPMethod.POST,
        "/payouts/payout/{payout_request_id}/cancel",
        mural.cancel_payout_request,
        resource="mural_payouts",
        tag="Mural Payouts",
        summary="Cancel payout request",
        description="Requires a transfer API key on the tenant's credentials.",
    ),
    # =========================================================================
    # Mural transactions
    # =========================================================================
    _proxy_route(
        HTTPMethod.POST,
        "/transactions/search/account/{account_id}",
        mural.search_transactions,
        resource="mural_transactions",
        tag="Mural Transactions",
        summary="Search account transactions",
    ),
    # =========================================================================
    # Provider cache
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/mural/provider-cache",
        handler=mural.invalidate_provider_cache,
        resource="provider_cache",
        tags=["Provider Cache"],
        summary="Invalidate cached provider clients",
        description=(
            "Drops the cached client for one account, or for every account "
            "when `account_identifier` is omitted."
        ),
        operation_id="invalidate_provider_cache",
        response_model=ProviderCacheResponse,
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=_AUTHENTICATED,
    ),
    # =========================================================================
    # Integration credentials
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/integration-credentials",
        handler=integration_credentials.create_integration_credential,
        resource="integration_credentials",
        tags=["Integration Credentials"],
        summary="Create integration credential",
        operation_id="create_integration_credential",
        response_model=IntegrationCredentialResponse,
        status_code=201,
        errors=[
            ErrorSpec(status=409, description="Credentials already exist for account"),
        ],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/integration-credentials",
        handler=integration_credentials.list_integration_credentials,
        resource="integration_credentials",
        tags=["Integration Credentials"],
        summary="List integration credentials",
        operation_id="list_integration_credentials",
        response_model=list[IntegrationCredentialResponse],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/integration-credentials/count",
        handler=integration_credentials.count_integration_credentials,
        resource="integration_credentials",
        tags=["Integration Credentials"],
        summary="Count integration credentials",
        operation_id="count_integration_credentials",
        response_model=CountResponse,
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/integration-credentials/{credential_id}",
        handler=integration_credentials.get_integration_credential,
        resource="integration_credentials",
        tags=["Integration Credentials"],
        summary="Get integration credential",
        operation_id="get_integration_credential",
        response_model=IntegrationCredentialResponse,
        errors=[ErrorSpec(status=404, description="Credential not found")],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=_AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.PATCH,
        path="/integration-credentials/{credential_id}",
        handler=integration_credentials.update_integration_credential,
        resource="integration_credentials",
        tags=["Integration Credentials"],
        summary="Update integration credential",
        operation_id="update_integration_credential",
        response_model=IntegrationCredentialResponse,
        errors=[
            ErrorSpec(status=404, description="Credential not found"),
            ErrorSpec(status=409, description="Credentials already exist for account"),
        ],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=_AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.PUT,
        path="/integration-credentials/{credential_id}",
        handler=integration_credentials.replace_integration_credential,
        resource="integration_credentials",
        tags=["Integration Credentials"],
        summary="Replace integration credential",
        operation_id="replace_integration_credential",
        response_model=IntegrationCredentialResponse,
        errors=[
            ErrorSpec(status=404, description="Credential not found"),
            ErrorSpec(status=409, description="Credentials already exist for account"),
        ],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=_AUTHENTICATED,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/integration-credentials/{credential_id}",
        handler=integration_credentials.delete_integration_credential,
        resource="integration_credentials",
        tags=["Integration Credentials"],
        summary="Delete integration credential",
        operation_id="delete_integration_credential",
        status_code=204,
        errors=[ErrorSpec(status=404, description="Credential not found")],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=_AUTHENTICATED,
    ),
]
