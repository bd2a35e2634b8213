"""Application services.

Exports:
    RateLimitRetryPolicy: Retry budget and backoff schedule
    call_with_rate_limit_retry: Retry a provider call while it is throttled
"""

from src.application.services.rate_limit_retry import (
    RateLimitRetryPolicy,
    call_with_rate_limit_retry,
)

__all__ = [
    "RateLimitRetryPolicy",
    "call_with_rate_limit_retry",
]
