"""Mural Pay provider client.

HTTP client for the Mural Pay API, bound to one tenant's credentials.
Every request carries ``Authorization: Bearer <apiKey>``; organization
scoped calls add ``on-behalf-of``, and money movement (execute/cancel
payout) adds ``transfer-api-key``.

Endpoints:
    GET  /api/accounts                              - List accounts
    GET  /api/accounts/{id}                         - Get account
    POST /api/accounts                              - Create account
    GET  /api/organizations/{id}                    - Get organization
    POST /api/organizations                         - Create organization
    POST /api/organizations/search                  - Search organizations
    GET  /api/organizations/{id}/kyc-link           - KYC link
    GET  /api/organizations/{id}/tos-link           - Terms of service link
    POST /api/payouts/payout                        - Create payout request
    GET  /api/payouts/payout/{id}                   - Get payout request
    POST /api/payouts/search                        - Search payout requests
    POST /api/payouts/payout/{id}/execute           - Execute payout request
    POST /api/payouts/payout/{id}/cancel            - Cancel payout request
    GET  /api/payouts/bank-details                  - Bank details per rail
    POST /api/payouts/fees/token-to-fiat            - Fees for token amounts
    POST /api/payouts/fees/fiat-to-token            - Fees for fiat amounts
    POST /api/transactions/search/account/{id}      - Search transactions

Responses are passed through as JSON, except that a bare account list is
wrapped as ``{"accounts": [...]}`` and a payout creation that returns a
``payouts`` list is reduced to its first element.
"""

from typing import Any

from src.core.constants import (
    BEARER_PREFIX,
    MURAL_PROVIDER_TYPE,
    ON_BEHALF_OF_HEADER,
    PAGINATION_MAX_ITEMS_DEFAULT,
    PAGINATION_PAGE_SIZE_DEFAULT,
    PROVIDER_TIMEOUT_DEFAULT,
    TRANSFER_API_KEY_HEADER,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import ProviderError, ProviderInternalError
from src.infrastructure.providers.base_api_client import BaseProviderAPIClient
from src.infrastructure.providers.pagination import drain_pages


class MuralProvider(BaseProviderAPIClient):
    """Mural Pay API client for a single tenant.

    Immutable after construction: a credential change means a new instance.
    Instances hold no per-request state, so one client may serve concurrent
    requests.

    Attributes:
        has_transfer_api_key: Whether money movement operations are available.

    Example:
        >>> provider = MuralProvider(
        ...     base_url="https://api.muralpay.com",
        ...     api_key="k1",
        ... )
        >>> result = await provider.get_accounts(on_behalf_of="org-1")
        >>> match result:
        ...     case Success(value={"accounts": accounts}):
        ...         print(f"Found {len(accounts)} account(s)")
        ...     case Failure(error=error):
        ...         print(f"Failed: {error.message}")
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        transfer_api_key: str | None = None,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize Mural provider client.

        Args:
            base_url: Mural API base URL.
            api_key: Mural API key (sent as a Bearer token).
            transfer_api_key: Key required for execute/cancel payout.
            timeout: HTTP request timeout in seconds.

        Raises:
            ValueError: If base_url or api_key is empty.
        """
        if not base_url or not api_key:
            raise ValueError("Mural provider requires base_url and api_key")

        super().__init__(
            base_url=base_url,
            provider_name=MURAL_PROVIDER_TYPE,
            timeout=timeout,
            default_headers={
                "Authorization": f"{BEARER_PREFIX}{api_key}",
                "Content-Type": "application/json",
            },
        )
        self._transfer_api_key = transfer_api_key or None

    @property
    def has_transfer_api_key(self) -> bool:
        """Whether a transfer API key was configured."""
        return self._transfer_api_key is not None

    # =========================================================================
    # Request helpers
    # =========================================================================

    @staticmethod
    def _scoped_headers(on_behalf_of: str | None) -> dict[str, str]:
        if on_behalf_of:
            return {ON_BEHALF_OF_HEADER: on_behalf_of}
        return {}

    @staticmethod
    def _page_params(limit: int | None, next_id: str | None) -> dict[str, str]:
        params: dict[str, str] = {}
        if limit is not None:
            params["limit"] = str(limit)
        if next_id is not None:
            params["nextId"] = next_id
        return params

    def _transfer_headers(
        self,
        on_behalf_of: str | None,
        action: str,
    ) -> Result[dict[str, str], ProviderError]:
        """Build headers for money movement, or fail if no transfer key exists."""
        if self._transfer_api_key is None:
            self._logger.warning(
                "mural_transfer_api_key_missing",
                action=action,
            )
            return Failure(
                error=ProviderInternalError(
                    code=ErrorCode.PROVIDER_NOT_CONFIGURED,
                    message=f"Transfer API key is required to {action} payout requests",
                    provider_name=self._provider_name,
                )
            )

        headers = self._scoped_headers(on_behalf_of)
        headers[TRANSFER_API_KEY_HEADER] = self._transfer_api_key
        return Success(value=headers)

    # =========================================================================
    # Accounts
    # =========================================================================

    async def get_accounts(
        self,
        on_behalf_of: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """List accounts.

        Args:
            on_behalf_of: Organization to act for.

        Returns:
            Success(dict): Always an object; a bare upstream list is wrapped
                as ``{"accounts": [...]}``.
            Failure(ProviderError): On any upstream or transport error, or
                a body that is neither an object nor a list.
        """
        result = await self._execute_and_parse(
            method="GET",
            path="/api/accounts",
            headers=self._scoped_headers(on_behalf_of),
            operation="get_accounts",
        )
        if isinstance(result, Failure):
            return result

        if isinstance(result.value, list):
            return Success(value={"accounts": result.value})
        if not isinstance(result.value, dict):
            return Failure(
                error=ProviderInternalError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Unexpected accounts response from {self._display_name}",
                    provider_name=self._provider_name,
                )
            )
        return result

    async def get_account(
        self,
        account_id: str,
        on_behalf_of: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Get a single account."""
        return await self._execute_and_parse(
            method="GET",
            path=f"/api/accounts/{account_id}",
            headers=self._scoped_headers(on_behalf_of),
            operation="get_account",
        )

    async def create_account(
        self,
        name: str,
        description: str | None = None,
        on_behalf_of: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Create an account.

        Args:
            name: Account name.
            description: Optional account description (omitted when None).
            on_behalf_of: Organization that will own the account.
        """
        body: dict[str, Any] = {"name": name}
        if description is not None:
            body["description"] = description

        return await self._execute_and_parse(
            method="POST",
            path="/api/accounts",
            headers=self._scoped_headers(on_behalf_of),
            json_data=body,
            operation="create_account",
        )

    # =========================================================================
    # Organizations
    # =========================================================================

    async def get_organization(
        self,
        organization_id: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Get a single organization."""
        return await self._execute_and_parse(
            method="GET",
            path=f"/api/organizations/{organization_id}",
            operation="get_organization",
        )

    async def search_organizations(
        self,
        filter: dict[str, Any] | None = None,
        limit: int | None = None,
        next_id: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Search organizations, one page at a time.

        Args:
            filter: Upstream search filter (empty object when None).
            limit: Page size.
            next_id: Cursor returned by the previous page.

        Returns:
            Success(dict): ``{"results": [...], "nextId": ..., "total": ...}``.
            Failure(ProviderError): On any upstream or transport error.
        """
        return await self._execute_and_parse(
            method="POST",
            path="/api/organizations/search",
            params=self._page_params(limit, next_id),
            json_data=filter or {},
            operation="search_organizations",
        )

    async def create_organization(
        self,
        request: dict[str, Any],
    ) -> Result[dict[str, Any], ProviderError]:
        """Create an individual or business organization.

        The request is forwarded unchanged; business requests keep their
        ``businessName`` field.
        """
        return await self._execute_and_parse(
            method="POST",
            path="/api/organizations",
            json_data=request,
            operation="create_organization",
        )

    async def get_organization_kyc_link(
        self,
        organization_id: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Get the KYC onboarding link for an organization."""
        return await self._execute_and_parse(
            method="GET",
            path=f"/api/organizations/{organization_id}/kyc-link",
            operation="get_organization_kyc_link",
        )

    async def get_organization_tos_link(
        self,
        organization_id: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Get the terms-of-service acceptance link for an organization."""
        return await self._execute_and_parse(
            method="GET",
            path=f"/api/organizations/{organization_id}/tos-link",
            operation="get_organization_tos_link",
        )

    # =========================================================================
    # Payouts
    # =========================================================================

    async def create_payout_request(
        self,
        request: dict[str, Any],
        on_behalf_of: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Create a payout request.

        Returns:
            Success(dict): The first element of ``payouts`` when the upstream
                returns a non-empty ``payouts`` list, otherwise the raw body.
            Failure(ProviderError): On any upstream or transport error.
        """
        result = await self._execute_and_parse(
            method="POST",
            path="/api/payouts/payout",
            headers=self._scoped_headers(on_behalf_of),
            json_data=request,
            operation="create_payout_request",
        )
        if isinstance(result, Failure):
            return result

        body = result.value
        if isinstance(body, dict):
            payouts = body.get("payouts")
            if isinstance(payouts, list) and payouts:
                return Success(value=payouts[0])
        return result

    async def get_payout_request(
        self,
        payout_request_id: str,
        on_behalf_of: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Get a single payout request."""
        return await self._execute_and_parse(
            method="GET",
            path=f"/api/payouts/payout/{payout_request_id}",
            headers=self._scoped_headers(on_behalf_of),
            operation="get_payout_request",
        )

    async def search_payout_requests(
        self,
        filter: dict[str, Any],
        limit: int | None = None,
        next_id: str | None = None,
        on_behalf_of: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Search payout requests, one page at a time.

        Args:
            filter: Payout status filter, sent as the request body.
            limit: Page size.
            next_id: Cursor returned by the previous page.
            on_behalf_of: Organization to act for.
        """
        return await self._execute_and_parse(
            method="POST",
            path="/api/payouts/search",
            headers=self._scoped_headers(on_behalf_of),
            params=self._page_params(limit, next_id),
            json_data=filter,
            operation="search_payout_requests",
        )

    async def execute_payout_request(
        self,
        payout_request_id: str,
        on_behalf_of: str | None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Execute a payout request (moves money).

        Fails locally, without contacting the upstream, when the client was
        built without a transfer API key.

        Returns:
            Success(dict): Updated payout request.
            Failure(ProviderInternalError): If no transfer API key is configured.
            Failure(ProviderError): On any upstream or transport error.
        """
        headers = self._transfer_headers(on_behalf_of, "execute")
        if isinstance(headers, Failure):
            return headers

        return await self._execute_and_parse(
            method="POST",
            path=f"/api/payouts/payout/{payout_request_id}/execute",
            headers=headers.value,
            json_data={},
            operation="execute_payout_request",
        )

    async def cancel_payout_request(
        self,
        payout_request_id: str,
        on_behalf_of: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Cancel a payout request.

        Same transfer API key precondition as execute_payout_request.
        """
        headers = self._transfer_headers(on_behalf_of, "cancel")
        if isinstance(headers, Failure):
            return headers

        return await self._execute_and_parse(
            method="POST",
            path=f"/api/payouts/payout/{payout_request_id}/cancel",
            headers=headers.value,
            json_data={},
            operation="cancel_payout_request",
        )

    async def get_bank_details(
        self,
        currency_rail_codes: list[str],
    ) -> Result[dict[str, Any], ProviderError]:
        """Get bank details for the given fiat currency and rail codes.

        Each code is sent as its own ``fiatCurrencyAndRail`` query parameter.
        """
        return await self._execute_and_parse(
            method="GET",
            path="/api/payouts/bank-details",
            params=[("fiatCurrencyAndRail", code) for code in currency_rail_codes],
            operation="get_bank_details",
        )

    async def get_payout_fees_for_token_amount(
        self,
        requests: list[dict[str, Any]],
    ) -> Result[Any, ProviderError]:
        """Quote payout fees for token amounts."""
        return await self._execute_and_parse(
            method="POST",
            path="/api/payouts/fees/token-to-fiat",
            json_data={"tokenFeeRequests": requests},
            operation="get_payout_fees_for_token_amount",
        )

    async def get_payout_fees_for_fiat_amount(
        self,
        requests: list[dict[str, Any]],
    ) -> Result[Any, ProviderError]:
        """Quote payout fees for fiat amounts."""
        return await self._execute_and_parse(
            method="POST",
            path="/api/payouts/fees/fiat-to-token",
            json_data={"fiatFeeRequests": requests},
            operation="get_payout_fees_for_fiat_amount",
        )

    # =========================================================================
    # Transactions
    # =========================================================================

    async def search_transactions(
        self,
        account_id: str,
        limit: int | None = None,
        next_id: str | None = None,
        on_behalf_of: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Search an account's transactions, one page at a time."""
        return await self._execute_and_parse(
            method="POST",
            path=f"/api/transactions/search/account/{account_id}",
            headers=self._scoped_headers(on_behalf_of),
            params=self._page_params(limit, next_id),
            json_data={},
            operation="search_transactions",
        )

    # =========================================================================
    # Collected listings
    # =========================================================================

    async def get_all_accounts(
        self,
        max_items: int = PAGINATION_MAX_ITEMS_DEFAULT,
        on_behalf_of: str | None = None,
    ) -> Result[list[dict[str, Any]], ProviderError]:
        """List accounts as a plain list, capped at max_items.

        The accounts endpoint is not paginated, so this is one request.
        """
        result = await self.get_accounts(on_behalf_of)
        if isinstance(result, Failure):
            return result

        accounts = result.value.get("accounts")
        if not isinstance(accounts, list):
            return Success(value=[])
        return Success(value=accounts[:max_items])

    async def get_all_payout_requests(
        self,
        filter: dict[str, Any],
        max_items: int = PAGINATION_MAX_ITEMS_DEFAULT,
        on_behalf_of: str | None = None,
    ) -> list[dict[str, Any]]:
        """Collect payout requests across pages (partial on page failure)."""
        return await drain_pages(
            lambda limit, next_id: self.search_payout_requests(
                filter, limit=limit, next_id=next_id, on_behalf_of=on_behalf_of
            ),
            page_size=PAGINATION_PAGE_SIZE_DEFAULT,
            max_items=max_items,
        )

    async def get_all_organizations(
        self,
        filter: dict[str, Any] | None = None,
        max_items: int = PAGINATION_MAX_ITEMS_DEFAULT,
    ) -> list[dict[str, Any]]:
        """Collect organizations across pages (partial on page failure)."""
        return await drain_pages(
            lambda limit, next_id: self.search_organizations(
                filter, limit=limit, next_id=next_id
            ),
            page_size=PAGINATION_PAGE_SIZE_DEFAULT,
            max_items=max_items,
        )

    async def get_all_transactions(
        self,
        account_id: str,
        max_items: int = PAGINATION_MAX_ITEMS_DEFAULT,
        on_behalf_of: str | None = None,
    ) -> list[dict[str, Any]]:
        """Collect an account's transactions across pages (partial on page failure)."""
        return await drain_pages(
            lambda limit, next_id: self.search_transactions(
                account_id, limit=limit, next_id=next_id, on_behalf_of=on_behalf_of
            ),
            page_size=PAGINATION_PAGE_SIZE_DEFAULT,
            max_items=max_items,
        )
