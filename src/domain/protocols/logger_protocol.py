"""LoggerProtocol definition for structured logging.

Structured logging port used by the composition root and exception
handlers. Implementations MUST keep logs structured (key-value context)
and safe: API keys, transfer keys and bearer tokens are never logged.

Usage:
    from src.core.container import get_logger

    logger: LoggerProtocol = get_logger()
    logger.info("provider_cache_invalidated", account_identifier="acme")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name.
            error: Optional exception; adapters add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context."""
        ...
