"""Tests for src/application/services/rate_limit_retry.py."""

import pytest

from src.application.services.rate_limit_retry import (
    RateLimitRetryPolicy,
    call_with_rate_limit_retry,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors import (
    ProviderNotFoundError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)
from tests.helpers import RecordingSleep


def _throttled(retry_after: int = 2, *, hinted: bool = True) -> Failure:
    return Failure(
        error=ProviderRateLimitError(
            code=ErrorCode.PROVIDER_RATE_LIMITED,
            message="Mural API rate limit exceeded",
            provider_name="mural",
            retry_after=retry_after,
            retry_after_hinted=hinted,
        )
    )


class ScriptedOperation:
    """Returns scripted results in order and counts invocations."""

    def __init__(self, *results) -> None:
        self._results = list(results)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        return self._results[self.calls - 1]


class TestDelaySchedule:
    def test_hint_is_used_verbatim(self) -> None:
        policy = RateLimitRetryPolicy(jitter=5.0)

        assert policy.delay_for(attempt=2, retry_after=7) == 7.0

    def test_backoff_doubles_without_hint(self) -> None:
        policy = RateLimitRetryPolicy(jitter=0.0)

        delays = [policy.delay_for(attempt=n, retry_after=None) for n in (1, 2, 3, 4)]

        assert delays == [1.0, 2.0, 4.0, 8.0]

    def test_backoff_is_capped(self) -> None:
        policy = RateLimitRetryPolicy(jitter=0.0, max_delay=5.0)

        assert policy.delay_for(attempt=10, retry_after=None) == 5.0

    def test_jitter_comes_from_random_source(self) -> None:
        policy = RateLimitRetryPolicy(jitter=1.0, random_source=lambda: 0.5)

        assert policy.delay_for(attempt=1, retry_after=None) == 1.5

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_attempts": 0}, {"base_delay": -1.0}, {"jitter": -0.1}],
    )
    def test_invalid_policy_raises(self, kwargs) -> None:
        with pytest.raises(ValueError):
            RateLimitRetryPolicy(**kwargs)


class TestRetryLoop:
    async def test_retries_until_success(self, recording_sleep: RecordingSleep) -> None:
        operation = ScriptedOperation(
            _throttled(2), _throttled(3), Success(value={"ok": True})
        )

        result = await call_with_rate_limit_retry(
            operation, RateLimitRetryPolicy(max_attempts=3), sleep=recording_sleep
        )

        assert result == Success(value={"ok": True})
        assert operation.calls == 3
        assert recording_sleep.delays == [2.0, 3.0]

    async def test_returns_last_throttle_when_budget_exhausted(
        self, recording_sleep: RecordingSleep
    ) -> None:
        operation = ScriptedOperation(_throttled(1), _throttled(1), _throttled(4))

        result = await call_with_rate_limit_retry(
            operation, RateLimitRetryPolicy(max_attempts=3), sleep=recording_sleep
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderRateLimitError)
        assert result.error.retry_after == 4
        assert operation.calls == 3
        assert recording_sleep.delays == [1.0, 1.0]

    async def test_single_attempt_policy_never_sleeps(
        self, recording_sleep: RecordingSleep
    ) -> None:
        operation = ScriptedOperation(_throttled())

        result = await call_with_rate_limit_retry(
            operation, RateLimitRetryPolicy(max_attempts=1), sleep=recording_sleep
        )

        assert isinstance(result, Failure)
        assert operation.calls == 1
        assert recording_sleep.delays == []

    @pytest.mark.parametrize(
        "error",
        [
            ProviderNotFoundError(
                code=ErrorCode.PROVIDER_RESOURCE_NOT_FOUND,
                message="Mural resource not found",
                provider_name="mural",
            ),
            ProviderUnavailableError(
                code=ErrorCode.PROVIDER_UNAVAILABLE,
                message="Mural API request timed out",
                provider_name="mural",
            ),
        ],
    )
    async def test_other_failures_return_immediately(
        self, error, recording_sleep: RecordingSleep
    ) -> None:
        operation = ScriptedOperation(Failure(error=error), Success(value={}))

        result = await call_with_rate_limit_retry(
            operation, RateLimitRetryPolicy(), sleep=recording_sleep
        )

        assert result == Failure(error=error)
        assert operation.calls == 1
        assert recording_sleep.delays == []

    async def test_success_returns_on_first_attempt(
        self, recording_sleep: RecordingSleep
    ) -> None:
        operation = ScriptedOperation(Success(value=[1, 2]))

        result = await call_with_rate_limit_retry(
            operation, RateLimitRetryPolicy(), sleep=recording_sleep
        )

        assert result == Success(value=[1, 2])
        assert operation.calls == 1

    async def test_hint_longer_than_max_wait_returns_immediately(
        self, recording_sleep: RecordingSleep
    ) -> None:
        operation = ScriptedOperation(_throttled(60), Success(value={}))

        result = await call_with_rate_limit_retry(
            operation,
            RateLimitRetryPolicy(max_attempts=3, max_wait=10),
            sleep=recording_sleep,
        )

        assert isinstance(result, Failure)
        assert result.error.retry_after == 60
        assert operation.calls == 1
        assert recording_sleep.delays == []

    async def test_missing_hint_uses_backoff_within_max_wait(
        self, recording_sleep: RecordingSleep
    ) -> None:
        operation = ScriptedOperation(
            _throttled(30, hinted=False),
            _throttled(30, hinted=False),
            Success(value={"ok": True}),
        )

        result = await call_with_rate_limit_retry(
            operation,
            RateLimitRetryPolicy(max_attempts=3, jitter=0.0, max_wait=10),
            sleep=recording_sleep,
        )

        assert result == Success(value={"ok": True})
        assert operation.calls == 3
        assert recording_sleep.delays == [1.0, 2.0]

    async def test_exhausted_backoff_keeps_default_retry_after(
        self, recording_sleep: RecordingSleep
    ) -> None:
        operation = ScriptedOperation(
            _throttled(30, hinted=False), _throttled(30, hinted=False)
        )

        result = await call_with_rate_limit_retry(
            operation,
            RateLimitRetryPolicy(max_attempts=2, jitter=0.0, max_wait=10),
            sleep=recording_sleep,
        )

        assert isinstance(result, Failure)
        assert result.error.retry_after == 30
        assert recording_sleep.delays == [1.0]
