"""
Resilience patterns for remote calls.

Retry with exponential backoff and jitter, used by the Hive RPC and
exchange-rate clients.
"""

from shared.resilience.retry import (
    BackoffStrategy,
    Retry,
    RetryConfig,
    RetryError,
    with_retry,
)

__all__ = [
    "Retry",
    "RetryConfig",
    "RetryError",
    "BackoffStrategy",
    "with_retry",
]
