"""
Exchange rate provider interface.
"""

from abc import ABC, abstractmethod
from typing import Dict


class IExchangeRateProvider(ABC):
    """Abstract interface for the remote exchange-rate source."""

    @abstractmethod
    async def fetch_rates(self) -> Dict[str, float]:
        """
        Fetch the current rates relative to USD.

        Returns:
            Mapping of currency code to rate

        Raises:
            RateFetchError: On transport failure, non-2xx status or a
                malformed body
        """
