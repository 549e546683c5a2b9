"""
Async debouncer.

Collapses bursts of triggers into one call after a quiet period.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional


class Debouncer:
    """
    Schedule a coroutine function after ``delay`` seconds of silence.

    Each trigger() cancels the pending call and restarts the timer with
    the latest arguments.

    Example:
        debouncer = Debouncer(0.3, session.validate_now)
        debouncer.trigger("alice")
        await debouncer.flush()
    """

    def __init__(self, delay: float, func: Callable[..., Awaitable[Any]]):
        if delay < 0:
            raise ValueError("delay cannot be negative")
        self.delay = delay
        self.func = func
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, *args, **kwargs) -> asyncio.Task:
        """Restart the timer; must be called from a running loop."""
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(
            self._run_later(*args, **kwargs)
        )
        return self._task

    async def _run_later(self, *args, **kwargs) -> Any:
        await asyncio.sleep(self.delay)
        return await self.func(*args, **kwargs)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self.pending:
            self._task.cancel()
        self._task = None

    async def flush(self) -> Any:
        """
        Wait for the pending call to run.

        Returns:
            The call's result, or None when nothing was pending
        """
        task = self._task
        if task is None:
            return None
        try:
            return await task
        finally:
            if self._task is task:
                self._task = None
