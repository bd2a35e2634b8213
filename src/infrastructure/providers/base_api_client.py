"""Base API client for provider HTTP communication.

This module provides a base class for provider API clients that handles:
- HTTP request execution with timeout/connection error handling
- Response status code interpretation into ProviderError kinds
- JSON parsing with error handling
- Structured logging with provider context

Subclasses only need to:
1. Supply default headers (Bearer token, content type, etc.)
2. Call the base methods for HTTP operations

Architecture:
    - Infrastructure layer (adapter for external APIs)
    - Uses httpx for async HTTP
    - Returns Result types (no exceptions for business errors)
"""

from typing import Any

import httpx
import structlog

from src.core.constants import (
    PROVIDER_TIMEOUT_DEFAULT,
    RATE_LIMIT_RETRY_AFTER_DEFAULT,
    RESPONSE_BODY_MAX_LENGTH,
    THROTTLER_EXCEPTION_MARKER,
    UPSTREAM_RETRY_AFTER_HEADER,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import (
    ProviderAuthenticationError,
    ProviderBadRequestError,
    ProviderError,
    ProviderInternalError,
    ProviderNotFoundError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)

type QueryParams = dict[str, str] | list[tuple[str, str]]


class BaseProviderAPIClient:
    """Base class for provider API clients with shared HTTP handling.

    Provides common functionality for HTTP communication with external APIs:
    - Request execution with timeout/connection error handling
    - Response status code interpretation (400, 401/403, 404, 429, 5xx)
    - JSON parsing (empty bodies parse as an empty object)
    - Structured logging with provider context

    Each request opens its own httpx.AsyncClient bound to the base URL,
    the default headers and the timeout, so instances hold no connection
    state and can be shared between concurrent requests.

    Attributes:
        _base_url: Provider API base URL (without trailing slash).
        _provider_name: Provider identifier for logging and error messages.
        _timeout: HTTP request timeout in seconds.
        _default_headers: Headers sent with every request.
        _logger: Structured logger with provider context.

    Example:
        >>> class MuralProvider(BaseProviderAPIClient):
        ...     def __init__(self, *, base_url: str, api_key: str):
        ...         super().__init__(
        ...             base_url=base_url,
        ...             provider_name="mural",
        ...             default_headers={"Authorization": f"Bearer {api_key}"},
        ...         )
        ...
        ...     async def get_account(self, account_id: str):
        ...         return await self._execute_and_parse(
        ...             method="GET",
        ...             path=f"/api/accounts/{account_id}",
        ...             operation="get_account",
        ...         )
    """

    def __init__(
        self,
        *,
        base_url: str,
        provider_name: str,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize base provider API client.

        Args:
            base_url: Provider API base URL (e.g., "https://api.muralpay.com").
            provider_name: Provider identifier (e.g., "mural").
            timeout: HTTP request timeout in seconds.
            default_headers: Headers attached to every request.
        """
        self._base_url = base_url.rstrip("/")
        self._provider_name = provider_name
        self._timeout = timeout
        self._default_headers = dict(default_headers or {})
        self._logger = structlog.get_logger(f"{provider_name}_api")

    @property
    def base_url(self) -> str:
        """Provider API base URL."""
        return self._base_url

    @property
    def timeout(self) -> float:
        """Per-request timeout in seconds."""
        return self._timeout

    @property
    def _display_name(self) -> str:
        return self._provider_name.title()

    async def _execute_request(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        params: QueryParams | None = None,
        json_data: Any = None,
        operation: str,
    ) -> Result[httpx.Response, ProviderError]:
        """Execute HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: URL path relative to base_url.
            headers: Per-request headers merged over the defaults.
            params: Optional query parameters (pairs allow repeated keys).
            json_data: Optional JSON body for POST/PUT requests.
            operation: Operation name for logging.

        Returns:
            Success(httpx.Response): Raw HTTP response on success.
            Failure(ProviderUnavailableError): On timeout or connection error.
        """
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._default_headers,
                timeout=self._timeout,
            ) as client:
                response = await client.request(
                    method=method,
                    url=path,
                    headers=headers,
                    params=params,
                    json=json_data,
                )
            return Success(value=response)

        except httpx.TimeoutException as e:
            self._logger.warning(
                f"{self._provider_name}_api_timeout",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{self._display_name} API request timed out",
                    provider_name=self._provider_name,
                )
            )

        except httpx.RequestError as e:
            self._logger.warning(
                f"{self._provider_name}_api_connection_error",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{self._display_name} API error: {e}",
                    provider_name=self._provider_name,
                )
            )

    def _extract_error_payload(
        self,
        response: httpx.Response,
    ) -> tuple[str, list[str]]:
        """Pull a human-readable message and detail list from an error body.

        The message is the upstream `details` list joined with ", " when it
        is non-empty, else the upstream `message`, else a generic fallback.

        Returns:
            Tuple of (message, details).
        """
        try:
            data = response.json()
        except ValueError:
            data = None

        details: list[str] = []
        upstream_message = None
        if isinstance(data, dict):
            raw_details = data.get("details")
            if isinstance(raw_details, list):
                details = [str(item) for item in raw_details]
            upstream_message = data.get("message")

        if details:
            return ", ".join(details), details
        if upstream_message:
            return str(upstream_message), details
        return f"Unknown {self._display_name} error", details

    def _parse_retry_after(self, response: httpx.Response) -> int | None:
        """Read the upstream retry hint; None when absent or unparseable."""
        raw = response.headers.get(UPSTREAM_RETRY_AFTER_HEADER)
        if raw is None:
            return None
        try:
            return max(int(float(raw)), 0)
        except (ValueError, OverflowError):
            return None

    def _check_error_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Failure[ProviderError] | None:
        """Check HTTP response for errors and return appropriate ProviderError.

        Args:
            response: HTTP response to check.
            operation: Operation name for logging.

        Returns:
            Failure(ProviderError) if error detected, None if response is 2xx.
        """
        status = response.status_code

        # Success - no error
        if 200 <= status < 300:
            return None

        message, details = self._extract_error_payload(response)

        # Rate limiting (429, or 500 raised by the upstream throttler)
        is_throttled = status == 429 or (
            status == 500
            and (
                THROTTLER_EXCEPTION_MARKER in message
                or THROTTLER_EXCEPTION_MARKER in response.text
            )
        )
        if is_throttled:
            hint = self._parse_retry_after(response)
            retry_after = RATE_LIMIT_RETRY_AFTER_DEFAULT if hint is None else hint
            self._logger.warning(
                f"{self._provider_name}_api_rate_limited",
                operation=operation,
                status_code=status,
                retry_after=retry_after,
            )
            return Failure(
                error=ProviderRateLimitError(
                    code=ErrorCode.PROVIDER_RATE_LIMITED,
                    message=f"{self._display_name} API rate limit exceeded",
                    provider_name=self._provider_name,
                    retry_after=retry_after,
                    retry_after_hinted=hint is not None,
                )
            )

        # Bad request (400)
        if status == 400:
            self._logger.warning(
                f"{self._provider_name}_api_bad_request",
                operation=operation,
                error=message,
            )
            return Failure(
                error=ProviderBadRequestError(
                    code=ErrorCode.PROVIDER_BAD_REQUEST,
                    message=message,
                    provider_name=self._provider_name,
                    errors=details,
                )
            )

        # Authentication errors (401 and 403)
        if status in (401, 403):
            self._logger.warning(
                f"{self._provider_name}_api_auth_failed",
                operation=operation,
                status_code=status,
            )
            return Failure(
                error=ProviderAuthenticationError(
                    code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message=message,
                    provider_name=self._provider_name,
                )
            )

        # Not found (404)
        if status == 404:
            self._logger.info(
                f"{self._provider_name}_api_not_found",
                operation=operation,
            )
            return Failure(
                error=ProviderNotFoundError(
                    code=ErrorCode.PROVIDER_RESOURCE_NOT_FOUND,
                    message=message,
                    provider_name=self._provider_name,
                )
            )

        # Anything else
        self._logger.warning(
            f"{self._provider_name}_api_error",
            operation=operation,
            status_code=status,
            response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
        )
        return Failure(
            error=ProviderInternalError(
                code=ErrorCode.PROVIDER_INTERNAL_ERROR,
                message=message,
                provider_name=self._provider_name,
                status_code=status,
            )
        )

    def _parse_json(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[Any, ProviderError]:
        """Parse response as JSON with error handling.

        Args:
            response: HTTP response to parse.
            operation: Operation name for logging.

        Returns:
            Success(Any): Parsed JSON value ({} for an empty body).
            Failure(ProviderError): On HTTP error or invalid JSON.
        """
        # Check for HTTP errors first
        error_result = self._check_error_response(response, operation)
        if error_result is not None:
            return error_result

        if not response.content.strip():
            return Success(value={})

        try:
            data = response.json()
        except ValueError as e:
            self._logger.error(
                f"{self._provider_name}_api_invalid_json",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderInternalError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Invalid JSON response from {self._display_name}",
                    provider_name=self._provider_name,
                    status_code=response.status_code,
                    details={"response_body": response.text[:RESPONSE_BODY_MAX_LENGTH]},
                )
            )

        self._logger.debug(
            f"{self._provider_name}_api_succeeded",
            operation=operation,
        )
        return Success(value=data)

    async def _execute_and_parse(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        params: QueryParams | None = None,
        json_data: Any = None,
        operation: str,
    ) -> Result[Any, ProviderError]:
        """Execute request and parse the JSON response.

        Combines _execute_request and _parse_json for convenience.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: URL path relative to base_url.
            headers: Per-request headers merged over the defaults.
            params: Optional query parameters.
            json_data: Optional JSON body for POST/PUT requests.
            operation: Operation name for logging.

        Returns:
            Success(Any): Parsed JSON value.
            Failure(ProviderError): On any error.
        """
        result = await self._execute_request(
            method=method,
            path=path,
            headers=headers,
            params=params,
            json_data=json_data,
            operation=operation,
        )

        if isinstance(result, Failure):
            return result

        return self._parse_json(result.value, operation)
