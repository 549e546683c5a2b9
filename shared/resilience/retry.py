"""
Retry pattern with exponential backoff and jitter.

Async-only: every remote call in OKpay runs on the event loop, so the
retry sleeps with asyncio.sleep and never blocks other coroutines.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from enum import Enum
from functools import wraps
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class BackoffStrategy(str, Enum):
    """Backoff strategy for retries."""

    EXPONENTIAL = "exponential"
    LINEAR = "linear"
    CONSTANT = "constant"


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    """Maximum number of attempts (including initial attempt)"""

    initial_delay: float = 0.5
    """Initial delay between retries in seconds"""

    max_delay: float = 5.0
    """Maximum delay between retries in seconds"""

    backoff_strategy: BackoffStrategy = BackoffStrategy.EXPONENTIAL
    """Backoff strategy: exponential, linear, or constant"""

    backoff_multiplier: float = 2.0
    """Multiplier for exponential/linear backoff"""

    jitter: bool = True
    """Add random jitter to spread out concurrent retries"""

    jitter_factor: float = 0.1
    """Jitter factor (0.0-1.0). 0.1 means +/-10% randomness"""

    retry_on: tuple = (Exception,)
    """Exception types to retry on"""

    def __post_init__(self):
        """Validate retry configuration."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("Retry delays cannot be negative")
        if not 0.0 <= self.jitter_factor <= 1.0:
            raise ValueError("jitter_factor must be between 0.0 and 1.0")


class RetryError(Exception):
    """Raised when all retry attempts are exhausted."""

    def __init__(
        self,
        message: str,
        attempts: int,
        last_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.attempts = attempts
        self.last_exception = last_exception


class Retry:
    """
    Async retry handler with configurable backoff strategies.

    Example:
        retry = Retry(RetryConfig(max_attempts=3, retry_on=(ClientError,)))
        accounts = await retry.execute_async(client.post_once, payload)
    """

    def __init__(
        self,
        config: Optional[RetryConfig] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config or RetryConfig()
        self._sleep = sleep

    def calculate_delay(self, attempt: int) -> float:
        """
        Calculate delay after a failed attempt.

        Args:
            attempt: Failed attempt number (0-indexed)

        Returns:
            Delay in seconds
        """
        if self.config.backoff_strategy == BackoffStrategy.EXPONENTIAL:
            delay = self.config.initial_delay * (
                self.config.backoff_multiplier**attempt
            )
        elif self.config.backoff_strategy == BackoffStrategy.LINEAR:
            delay = self.config.initial_delay + (
                self.config.backoff_multiplier * attempt
            )
        else:
            delay = self.config.initial_delay

        delay = min(delay, self.config.max_delay)

        if self.config.jitter:
            jitter_range = delay * self.config.jitter_factor
            delay = max(0.0, delay + random.uniform(-jitter_range, jitter_range))

        return delay

    def _should_retry(self, exception: Exception) -> bool:
        return isinstance(exception, self.config.retry_on)

    async def execute_async(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute async function with retry logic.

        Args:
            func: Async function to execute
            *args: Positional arguments for func
            **kwargs: Keyword arguments for func

        Returns:
            Function result

        Raises:
            RetryError: When all attempts exhausted
            Exception: Any non-retryable exception, unchanged
        """
        attempts = self.config.max_attempts

        for attempt in range(attempts):
            try:
                result = await func(*args, **kwargs)
                if attempt > 0:
                    logger.info(f"Operation succeeded on attempt {attempt + 1}/{attempts}")
                return result

            except Exception as e:
                if not self._should_retry(e):
                    raise

                if attempt >= attempts - 1:
                    raise RetryError(
                        f"All {attempts} attempts exhausted. "
                        f"Last error: {type(e).__name__}: {e}",
                        attempts=attempts,
                        last_exception=e,
                    ) from e

                delay = self.calculate_delay(attempt)
                logger.warning(
                    f"{type(e).__name__}: {e}. "
                    f"Attempt {attempt + 1}/{attempts}. "
                    f"Retrying in {delay:.2f}s..."
                )
                await self._sleep(delay)

        raise RetryError("Unexpected retry exhaustion", attempts=attempts)

    def decorator(self, func: Callable) -> Callable:
        """Wrap an async function with this retry policy."""

        @wraps(func)
        async def wrapper(*args, **kwargs):
            return await self.execute_async(func, *args, **kwargs)

        return wrapper


def with_retry(config: Optional[RetryConfig] = None):
    """
    Decorator factory for retry logic.

    Example:
        @with_retry(RetryConfig(max_attempts=5, initial_delay=0.2))
        async def fetch_rates():
            ...
    """
    return Retry(config or RetryConfig()).decorator


__all__ = [
    "Retry",
    "RetryConfig",
    "RetryError",
    "BackoffStrategy",
    "with_retry",
]
