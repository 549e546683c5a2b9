"""
Staleness guard for concurrent account validations.

Several lookups may be in flight while the user types; only the result
for the most recently issued candidate is allowed through.
"""

from typing import Awaitable, Callable, Optional, TypeVar

from okpay.infrastructure.monitoring.metrics import stale_validations_total

T = TypeVar("T")


class StalenessGuard:
    """Last-issued-wins filter keyed by candidate string."""

    def __init__(self):
        self._current: Optional[str] = None

    @property
    def current(self) -> Optional[str]:
        return self._current

    def issue(self, candidate: str) -> str:
        """Mark candidate as the current validation target."""
        self._current = candidate
        return candidate

    def is_current(self, candidate: str) -> bool:
        return self._current is not None and self._current == candidate

    def reset(self) -> None:
        """Forget the current target (input cleared)."""
        self._current = None

    async def run(
        self, candidate: str, validate: Callable[[str], Awaitable[T]]
    ) -> Optional[T]:
        """
        Validate candidate, dropping the result if superseded.

        Args:
            candidate: Sanitized account candidate
            validate: Coroutine function performing the lookup

        Returns:
            The result, or None when a newer candidate was issued (or the
            target was reset) while the lookup was in flight
        """
        self.issue(candidate)
        result = await validate(candidate)

        if not self.is_current(candidate):
            stale_validations_total.inc()
            return None
        return result
