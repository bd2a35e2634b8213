"""API tests for non-versioned system routes.

Validates behavior of root, health, and config endpoints exposed by the
system router.
"""

import pytest
from fastapi.testclient import TestClient

from src.core.config import settings
from src.core.container import get_database
from src.main import app


class StubDatabase:
    def __init__(self, healthy: bool) -> None:
        self.healthy = healthy

    async def check_connection(self) -> bool:
        return self.healthy


@pytest.fixture
def system_client(client: TestClient):
    yield client
    app.dependency_overrides.pop(get_database, None)


def test_root_endpoint_returns_status_and_version(system_client: TestClient) -> None:
    response = system_client.get("/")

    assert response.status_code == 200
    assert response.json() == {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


async def test_health_reports_database_and_cache(
    system_client: TestClient, factory
) -> None:
    app.dependency_overrides[get_database] = lambda: StubDatabase(healthy=True)
    await factory.resolve("acme")

    response = system_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "database": "ok",
        "cached_providers": 1,
    }


def test_health_unavailable_database(system_client: TestClient) -> None:
    app.dependency_overrides[get_database] = lambda: StubDatabase(healthy=False)

    response = system_client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


def test_config_endpoint_behavior_depends_on_environment(
    system_client: TestClient,
) -> None:
    response = system_client.get("/config")

    if settings.is_development:
        assert response.status_code == 200
        data = response.json()
        assert data["environment"] == settings.environment.value
        assert data["api"]["name"] == settings.app_name
        assert data["database"]["url"] == "<redacted>"
    else:
        assert response.status_code == 403
        assert (
            response.json()["detail"] == "Config endpoint only available in development"
        )


def test_responses_carry_trace_id(system_client: TestClient) -> None:
    response = system_client.get("/", headers={"X-Trace-Id": "trace-1"})

    assert response.headers["X-Trace-Id"] == "trace-1"
