"""Tests for src/infrastructure/providers/base_api_client.py.

Verifies that BaseProviderAPIClient turns upstream responses and transport
failures into normalized ProviderError kinds, and parses JSON bodies.

Reference:
    - src/infrastructure/providers/base_api_client.py
"""

import httpx
import pytest
from pytest_httpx import HTTPXMock

from src.core.constants import PROVIDER_TIMEOUT_DEFAULT, RATE_LIMIT_RETRY_AFTER_DEFAULT
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import ProviderErrorKind
from src.domain.errors import (
    ProviderAuthenticationError,
    ProviderBadRequestError,
    ProviderInternalError,
    ProviderNotFoundError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)
from src.infrastructure.providers.base_api_client import BaseProviderAPIClient

BASE_URL = "https://api.test.com"


class ConcreteAPIClient(BaseProviderAPIClient):
    """Concrete implementation for testing."""

    def __init__(self, *, base_url: str, timeout: float = PROVIDER_TIMEOUT_DEFAULT):
        super().__init__(
            base_url=base_url,
            provider_name="mural",
            timeout=timeout,
            default_headers={"Authorization": "Bearer secret"},
        )

    async def fetch(self, path: str = "/api/things"):
        return await self._execute_and_parse(
            method="GET",
            path=path,
            operation="fetch",
        )


@pytest.fixture
def client() -> ConcreteAPIClient:
    return ConcreteAPIClient(base_url=BASE_URL)


class TestBaseProviderAPIClientInit:
    """Tests for BaseProviderAPIClient initialization."""

    def test_strips_trailing_slash_from_base_url(self) -> None:
        """Base URL should have trailing slash removed."""
        client = ConcreteAPIClient(base_url="https://api.test.com/")
        assert client.base_url == "https://api.test.com"

    def test_uses_default_timeout(self) -> None:
        """Should use PROVIDER_TIMEOUT_DEFAULT when timeout not specified."""
        client = ConcreteAPIClient(base_url=BASE_URL)
        assert client.timeout == PROVIDER_TIMEOUT_DEFAULT

    def test_uses_custom_timeout(self) -> None:
        """Should use custom timeout when specified."""
        client = ConcreteAPIClient(base_url=BASE_URL, timeout=5.0)
        assert client.timeout == 5.0


class TestSuccessfulResponses:
    """2xx handling and JSON parsing."""

    async def test_returns_parsed_json(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/api/things", json={"id": "t1"})

        result = await client.fetch()

        assert result == Success(value={"id": "t1"})

    async def test_sends_default_headers(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/api/things", json={})

        await client.fetch()

        request = httpx_mock.get_request()
        assert request is not None
        assert request.headers["Authorization"] == "Bearer secret"

    async def test_empty_body_parses_as_empty_object(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/api/things", status_code=204)

        result = await client.fetch()

        assert result == Success(value={})

    async def test_invalid_json_is_internal_error(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/api/things", text="<html>oops")

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderInternalError)
        assert result.error.kind is ProviderErrorKind.INTERNAL
        assert result.error.code == ErrorCode.PROVIDER_INVALID_RESPONSE
        assert result.error.message == "Invalid JSON response from Mural"


class TestErrorMapping:
    """Non-2xx statuses map to exactly one error kind."""

    async def test_400_joins_details(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/api/things",
            status_code=400,
            json={"message": "Bad", "details": ["amount must be positive", "memo too long"]},
        )

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderBadRequestError)
        assert result.error.kind is ProviderErrorKind.BAD_REQUEST
        assert result.error.message == "amount must be positive, memo too long"
        assert result.error.errors == ["amount must be positive", "memo too long"]

    async def test_400_falls_back_to_message(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/api/things",
            status_code=400,
            json={"message": "Invalid payout", "details": []},
        )

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert result.error.message == "Invalid payout"
        assert result.error.errors == []

    async def test_400_without_body_uses_generic_message(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/api/things", status_code=400)

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert result.error.message == "Unknown Mural error"

    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_401_and_403_are_unauthorized(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock, status_code: int
    ) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/api/things",
            status_code=status_code,
            json={"message": "Invalid API key"},
        )

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderAuthenticationError)
        assert result.error.kind is ProviderErrorKind.UNAUTHORIZED
        assert result.error.message == "Invalid API key"

    async def test_404_is_not_found(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/api/things",
            status_code=404,
            json={"message": "Account not found"},
        )

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderNotFoundError)
        assert result.error.kind is ProviderErrorKind.NOT_FOUND

    async def test_429_uses_retry_after_api_header(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/api/things",
            status_code=429,
            headers={"retry-after-api": "12"},
        )

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderRateLimitError)
        assert result.error.kind is ProviderErrorKind.RATE_LIMITED
        assert result.error.retry_after == 12
        assert result.error.retry_after_hinted is True

    async def test_429_without_hint_defaults_to_30(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/api/things", status_code=429)

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert result.error.retry_after == RATE_LIMIT_RETRY_AFTER_DEFAULT == 30
        assert result.error.retry_after_hinted is False

    async def test_unparseable_hint_falls_back_to_default(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/api/things",
            status_code=429,
            headers={"retry-after-api": "soon"},
        )

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert result.error.retry_after == 30
        assert result.error.retry_after_hinted is False

    async def test_500_throttler_exception_is_rate_limited(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/api/things",
            status_code=500,
            json={"message": "ThrottlerException: Too Many Requests"},
        )

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderRateLimitError)
        assert result.error.retry_after == 30

    async def test_plain_500_is_internal(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/api/things",
            status_code=500,
            json={"message": "database exploded"},
        )

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderInternalError)
        assert result.error.status_code == 500
        assert result.error.message == "database exploded"

    async def test_unexpected_status_is_internal(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/api/things", status_code=418)

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert result.error.kind is ProviderErrorKind.INTERNAL
        assert result.error.status_code == 418


class TestTransportErrors:
    """Timeouts and connection failures are SERVICE_UNAVAILABLE."""

    async def test_timeout(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderUnavailableError)
        assert result.error.kind is ProviderErrorKind.SERVICE_UNAVAILABLE
        assert result.error.message == "Mural API request timed out"

    async def test_connection_error(
        self, client: ConcreteAPIClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        result = await client.fetch()

        assert isinstance(result, Failure)
        assert result.error.kind is ProviderErrorKind.SERVICE_UNAVAILABLE
        assert "connection refused" in result.error.message
