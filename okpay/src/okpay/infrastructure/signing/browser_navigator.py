"""
Browser navigator.

Hands URLs to the platform's default handler through ``webbrowser``.
"""

import asyncio
import webbrowser
from typing import Optional

from okpay.domain.services.i_navigator import INavigator
from shared.reporter import SystemReporter


class BrowserNavigator(INavigator):
    """
    Open URLs with the system browser / URL handler.

    webbrowser.open() blocks until the handler process is spawned, so it
    runs in the default executor. Its return value is the "handled"
    acknowledgement used by the delivery race.
    """

    def __init__(
        self,
        new_tab: bool = True,
        reporter: Optional[SystemReporter] = None,
    ):
        self.new = 2 if new_tab else 0
        self.reporter = reporter or SystemReporter(name="navigator", verbose=1)

    async def open(self, url: str) -> bool:
        loop = asyncio.get_running_loop()
        handled = await loop.run_in_executor(None, webbrowser.open, url, self.new)

        self.reporter.info(
            f"{'Opened' if handled else 'No handler for'} {url.split('?')[0]}",
            context="Navigator",
            verbose_level=2,
        )
        return bool(handled)
