"""Unit tests for ConsoleAdapter (structured console logging).

structlog is patched in the adapter module, so these tests observe the
calls the adapter makes without configuring real logging.
"""

from unittest.mock import MagicMock, patch

import pytest

from src.infrastructure.logging.console_adapter import ConsoleAdapter

_STRUCTLOG = "src.infrastructure.logging.console_adapter.structlog"


@pytest.fixture
def mock_structlog():
    with patch(_STRUCTLOG) as mocked:
        mocked.get_logger.return_value = MagicMock()
        yield mocked


@pytest.mark.unit
class TestConsoleAdapterLogging:
    @pytest.mark.parametrize("level", ["debug", "info", "warning"])
    def test_level_methods_forward_context(self, mock_structlog, level):
        adapter = ConsoleAdapter()

        getattr(adapter, level)("provider_factory_cache_hit", account_identifier="acme")

        getattr(mock_structlog.get_logger.return_value, level).assert_called_once_with(
            "provider_factory_cache_hit", account_identifier="acme"
        )

    def test_error_flattens_exception(self, mock_structlog):
        adapter = ConsoleAdapter()

        adapter.error("unhandled_exception", error=RuntimeError("boom"), trace_id="t1")

        mock_structlog.get_logger.return_value.error.assert_called_once_with(
            "unhandled_exception",
            trace_id="t1",
            error_type="RuntimeError",
            error_message="boom",
        )

    def test_error_without_exception(self, mock_structlog):
        adapter = ConsoleAdapter()

        adapter.error("database_unavailable")

        mock_structlog.get_logger.return_value.error.assert_called_once_with(
            "database_unavailable"
        )

    def test_bind_returns_new_adapter(self, mock_structlog):
        adapter = ConsoleAdapter()
        bound_logger = MagicMock()
        mock_structlog.get_logger.return_value.bind.return_value = bound_logger

        bound = adapter.bind(account_identifier="acme")
        bound.info("mural_request")

        assert bound is not adapter
        bound_logger.info.assert_called_once_with("mural_request")


@pytest.mark.unit
class TestConsoleAdapterConfiguration:
    def test_json_renderer_when_requested(self, mock_structlog):
        ConsoleAdapter(use_json=True)

        processors = mock_structlog.configure.call_args.kwargs["processors"]
        assert processors[-1] is mock_structlog.processors.JSONRenderer.return_value

    def test_console_renderer_by_default(self, mock_structlog):
        ConsoleAdapter()

        processors = mock_structlog.configure.call_args.kwargs["processors"]
        assert processors[-1] is mock_structlog.dev.ConsoleRenderer.return_value

    @pytest.mark.parametrize(
        ("level", "numeric"),
        [("DEBUG", 10), ("warning", 30), ("nonsense", 20)],
    )
    def test_level_filter(self, mock_structlog, level, numeric):
        ConsoleAdapter(level=level)

        mock_structlog.make_filtering_bound_logger.assert_called_once_with(numeric)
