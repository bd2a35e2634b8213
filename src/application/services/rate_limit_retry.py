"""Retry provider calls that the upstream throttled.

Provider clients never retry on their own. Request handlers wrap each call
in ``call_with_rate_limit_retry``, which re-issues the identical call while
the failure kind is RATE_LIMITED and the attempt budget lasts. Every other
failure, and success, is returned on the first attempt.

Architecture:
    - Application service (no HTTP, no framework imports)
    - Explicit loop over a Result union; nothing is raised
    - Sleep and jitter sources are injectable so schedules are testable

Usage:
    policy = RateLimitRetryPolicy(max_attempts=3)
    result = await call_with_rate_limit_retry(
        lambda: provider.get_accounts(on_behalf_of),
        policy,
    )
"""

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

import structlog

from src.core.result import Result, Success
from src.domain.enums import ProviderErrorKind

logger = structlog.get_logger(__name__)

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitRetryPolicy:
    """Retry budget and backoff schedule for throttled calls.

    Attributes:
        max_attempts: Total attempts including the first one.
        base_delay: First backoff step in seconds when no hint is given.
        max_delay: Cap on a single backoff step (before jitter).
        jitter: Upper bound of uniform random seconds added to backoff.
        max_wait: Longest upstream retry hint waited out; longer hints are
            returned to the caller immediately. None waits any hint.
        random_source: Returns a float in [0, 1) for jitter.

    Example:
        >>> policy = RateLimitRetryPolicy(jitter=0.0)
        >>> policy.delay_for(attempt=1, retry_after=None)
        1.0
        >>> policy.delay_for(attempt=3, retry_after=None)
        4.0
        >>> policy.delay_for(attempt=1, retry_after=7)
        7.0
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    jitter: float = 1.0
    max_wait: float | None = None
    random_source: Callable[[], float] = field(default=random.random, repr=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0 or self.jitter < 0:
            raise ValueError("delays must not be negative")

    def delay_for(self, *, attempt: int, retry_after: int | None) -> float:
        """Seconds to wait after a throttled attempt.

        Args:
            attempt: 1-based number of the attempt that was throttled.
            retry_after: Upstream hint in seconds, or None when the upstream
                sent no hint.

        Returns:
            float: The hint when present, otherwise exponential backoff
                ``min(base * 2**(attempt-1), max_delay)`` plus jitter.
        """
        if retry_after is not None:
            return float(retry_after)

        backoff = min(self.base_delay * (2 ** (attempt - 1)), self.max_delay)
        return backoff + self.random_source() * self.jitter

    def should_wait(self, delay: float) -> bool:
        """Whether a delay is short enough to wait out server-side."""
        return self.max_wait is None or delay <= self.max_wait


def _retry_after_of(error: Any) -> int | None:
    # A defaulted hint is reported to clients but not used as the wait
    if not getattr(error, "retry_after_hinted", True):
        return None
    return getattr(error, "retry_after", None)


def _is_rate_limited(error: Any) -> bool:
    return getattr(error, "kind", None) is ProviderErrorKind.RATE_LIMITED


async def call_with_rate_limit_retry(
    operation: Callable[[], Awaitable[Result[T, E]]],
    policy: RateLimitRetryPolicy,
    *,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    operation_name: str = "provider_call",
) -> Result[T, E]:
    """Run an operation, retrying while it reports RATE_LIMITED.

    Args:
        operation: Zero-argument callable issuing the identical request.
        policy: Retry budget and backoff schedule.
        sleep: Awaitable sleep (injected in tests).
        operation_name: Name used in log events.

    Returns:
        Result: First success, first non-throttling failure, or the last
            throttling failure once the budget or wait limit is reached.
    """
    attempt = 0
    while True:
        attempt += 1
        result = await operation()

        if isinstance(result, Success) or not _is_rate_limited(result.error):
            return result

        if attempt >= policy.max_attempts:
            logger.warning(
                "rate_limit_retry_exhausted",
                operation=operation_name,
                attempts=attempt,
            )
            return result

        delay = policy.delay_for(
            attempt=attempt,
            retry_after=_retry_after_of(result.error),
        )
        if not policy.should_wait(delay):
            logger.info(
                "rate_limit_retry_hint_too_long",
                operation=operation_name,
                attempt=attempt,
                delay=delay,
            )
            return result

        logger.info(
            "rate_limit_retry_scheduled",
            operation=operation_name,
            attempt=attempt,
            delay=delay,
        )
        await sleep(delay)

