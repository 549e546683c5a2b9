"""
Navigator interface.

Opens deep links and web URLs on behalf of the transfer director.
"""

from abc import ABC, abstractmethod


class INavigator(ABC):
    """Abstract interface for URL navigation."""

    @abstractmethod
    async def open(self, url: str) -> bool:
        """
        Open a URL.

        Args:
            url: Deep link or web URL

        Returns:
            True once a handler accepted the URL, False if none did.
            May take arbitrarily long; callers bound it with a timer.
        """
