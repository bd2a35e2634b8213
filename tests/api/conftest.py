"""Fixtures for API tests.

The app runs without its lifespan: each test installs a ProviderFactory
over an in-memory credential repository, and overrides authentication and
the retry policy. Upstream Mural calls are answered by pytest-httpx.
"""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from src.application.services import RateLimitRetryPolicy
from src.core.container import (
    get_integration_credential_repository,
    get_retry_policy,
)
from src.infrastructure.providers.provider_factory import ProviderFactory
from src.main import app
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
)
from tests.helpers import (
    TEST_SUBJECT,
    FakeCredentialRepository,
    ManualClock,
    make_credential,
)


@pytest.fixture
def repository() -> FakeCredentialRepository:
    """Credential store holding a valid Mural credential for 'acme'."""
    return FakeCredentialRepository(make_credential("acme", transfer_api_key="t1"))


@pytest.fixture
def factory(repository: FakeCredentialRepository, clock: ManualClock) -> ProviderFactory:
    return ProviderFactory(lookup=repository, clock=clock)


@pytest.fixture
def retry_policy() -> RateLimitRetryPolicy:
    """Single attempt; retry behaviour has its own tests."""
    return RateLimitRetryPolicy(max_attempts=1)


@pytest.fixture
def unauthenticated_client(
    repository: FakeCredentialRepository,
    factory: ProviderFactory,
    retry_policy: RateLimitRetryPolicy,
) -> Iterator[TestClient]:
    app.state.provider_factory = factory
    app.dependency_overrides[get_integration_credential_repository] = lambda: repository
    app.dependency_overrides[get_retry_policy] = lambda: retry_policy
    yield TestClient(app)
    app.dependency_overrides.clear()
    del app.state.provider_factory


@pytest.fixture
def client(unauthenticated_client: TestClient) -> TestClient:
    app.dependency_overrides[get_current_user] = lambda: CurrentUser(
        subject=TEST_SUBJECT
    )
    return unauthenticated_client
