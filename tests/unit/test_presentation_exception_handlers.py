"""Unit tests for the global Problem Details exception handlers."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, HTTPException, Query
from fastapi.testclient import TestClient

from src.core.config import settings
from src.presentation.routers.api.middleware.trace_middleware import (
    TRACE_ID_HEADER,
    TraceMiddleware,
)
from src.presentation.routers.api.v1.errors import exception_handlers
from src.presentation.routers.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)


@pytest.fixture
def logger(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    mock = MagicMock()
    monkeypatch.setattr(exception_handlers, "get_logger", lambda: mock)
    return mock


@pytest.fixture
def client(logger: MagicMock) -> TestClient:
    app = FastAPI()
    app.add_middleware(TraceMiddleware)
    register_exception_handlers(app)

    @app.get("/secure")
    async def secure() -> dict[str, str]:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.get("/mural/{account_identifier}/accounts")
    async def accounts(
        account_identifier: str,
        limit: int = Query(default=10),
    ) -> dict[str, str]:
        raise RuntimeError("boom")

    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.unit
class TestHTTPExceptions:
    def test_keeps_status_detail_and_headers(self, client: TestClient):
        response = client.get("/secure", headers={TRACE_ID_HEADER: "trace-1"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {
            "type": f"{settings.api_base_url}/errors/unauthorized",
            "title": "Authentication Required",
            "status": 401,
            "detail": "Invalid or expired token",
            "instance": "/secure",
            "trace_id": "trace-1",
        }

    def test_unknown_route_is_problem_details(self, client: TestClient):
        response = client.get("/nowhere")

        assert response.status_code == 404
        body = response.json()
        assert body["title"] == "Resource Not Found"
        assert body["instance"] == "/nowhere"

    def test_wrong_method_is_405(self, client: TestClient):
        response = client.post("/secure")

        assert response.status_code == 405
        assert response.json()["title"] == "Method Not Allowed"


@pytest.mark.unit
class TestValidationErrors:
    def test_query_errors_name_the_parameter(self, client: TestClient):
        response = client.get("/mural/acme/accounts", params={"limit": "many"})

        assert response.status_code == 422
        body = response.json()
        assert body["type"] == f"{settings.api_base_url}/errors/validation-failed"
        assert [e["field"] for e in body["errors"]] == ["limit"]
        assert body["errors"][0]["code"] == "int_parsing"


@pytest.mark.unit
class TestUnhandledExceptions:
    def test_returns_opaque_500(self, client: TestClient):
        response = client.get("/mural/acme/accounts")

        assert response.status_code == 500
        body = response.json()
        assert body["title"] == "Internal Server Error"
        assert "boom" not in body["detail"]

    def test_logs_with_tenant_context(self, client: TestClient, logger: MagicMock):
        client.get("/mural/acme/accounts")

        logger.error.assert_called_once()
        event = logger.error.call_args.args[0]
        context = logger.error.call_args.kwargs
        assert event == "unhandled_exception"
        assert context["error_type"] == "RuntimeError"
        assert context["account_identifier"] == "acme"
        assert context["request_path"] == "/mural/acme/accounts"
