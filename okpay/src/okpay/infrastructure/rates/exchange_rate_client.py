"""
Exchange-rate HTTP client.

Reads ``{"rates": {"EUR": 0.92, ...}}`` relative to USD.
"""

import asyncio
from typing import Dict, Optional

import aiohttp

from okpay.domain.exceptions import RateFetchError
from okpay.domain.services.i_exchange_rate_provider import IExchangeRateProvider
from okpay.infrastructure.monitoring.metrics import rate_requests_total
from shared.reporter import SystemReporter
from shared.resilience import Retry, RetryConfig, RetryError


class ExchangeRateClient(IExchangeRateProvider):
    """
    Exchange-rate API client.

    Transport errors and 5xx answers are retried; anything still failing
    surfaces as RateFetchError for the converter's fallback policy.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        max_retries: int = 2,
        retry_initial_delay: float = 0.5,
        session: Optional[aiohttp.ClientSession] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize exchange-rate client.

        Args:
            url: Endpoint returning the latest USD-based rates
            timeout: Total request timeout in seconds
            max_retries: Max attempts per fetch
            retry_initial_delay: First backoff delay in seconds
            session: Optional shared aiohttp session (not closed by close())
            reporter: Optional SystemReporter for logging
        """
        self.url = url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None
        self.reporter = reporter or SystemReporter(name="exchange_rates", verbose=1)
        self.retry = Retry(
            RetryConfig(
                max_attempts=max_retries,
                initial_delay=retry_initial_delay,
                max_delay=5.0,
                retry_on=(aiohttp.ClientError, asyncio.TimeoutError),
            )
        )

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _fetch_once(self) -> Dict[str, float]:
        session = await self._get_session()

        async with session.get(self.url) as response:
            if response.status >= 500:
                raise aiohttp.ClientError(f"Rate server error {response.status}")
            if response.status != 200:
                raise RateFetchError(
                    f"Rate fetch failed with status {response.status}",
                    status_code=response.status,
                )
            data = await response.json(content_type=None)

        rates = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(rates, dict) or not rates:
            raise RateFetchError("Rate response has no rates table")
        return rates

    async def fetch_rates(self) -> Dict[str, float]:
        """
        Fetch the latest rates.

        Returns:
            Mapping of currency code to rate relative to USD

        Raises:
            RateFetchError: If the rates cannot be read
        """
        try:
            rates = await self.retry.execute_async(self._fetch_once)
        except RateFetchError:
            rate_requests_total.labels(status="error").inc()
            raise
        except (RetryError, ValueError) as e:
            rate_requests_total.labels(status="error").inc()
            raise RateFetchError(f"Rate fetch failed: {e}") from e

        rate_requests_total.labels(status="success").inc()
        self.reporter.debug(
            f"Fetched {len(rates)} exchange rates", context="ExchangeRates"
        )
        return rates
