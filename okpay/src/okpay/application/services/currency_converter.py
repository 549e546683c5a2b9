"""
Currency converter.

Owns the daily rate snapshot policy (today's cache, network, yesterday's
cache) and the pure conversion arithmetic.
"""

from datetime import date, timedelta
from typing import Callable, Optional

from okpay.domain.exceptions import RateFetchError
from okpay.domain.services.i_exchange_rate_provider import IExchangeRateProvider
from okpay.domain.value_objects.currency import (
    REFERENCE_CURRENCY,
    validate_currency as _is_supported,
)
from okpay.domain.value_objects.exchange_rate_snapshot import ExchangeRateSnapshot
from okpay.infrastructure.cache.rate_cache import RateCache
from shared.reporter import SystemReporter


class CurrencyConverter:
    """
    Exchange-rate snapshot loader and converter.

    At most one network fetch per calendar day when the cache works;
    when the fetch fails, yesterday's snapshot is the only fallback.
    """

    def __init__(
        self,
        provider: IExchangeRateProvider,
        rate_cache: RateCache,
        today_provider: Callable[[], date] = date.today,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize converter.

        Args:
            provider: Remote exchange-rate source
            rate_cache: Date-keyed snapshot cache
            today_provider: Clock returning the current local date
            reporter: Optional SystemReporter for logging
        """
        self.provider = provider
        self.rate_cache = rate_cache
        self.today_provider = today_provider
        self.reporter = reporter or SystemReporter(name="currency", verbose=1)

    async def fetch_snapshot(self) -> Optional[ExchangeRateSnapshot]:
        """
        Load today's snapshot.

        Returns:
            Today's cached or freshly fetched snapshot, yesterday's cached
            snapshot when the fetch fails, else None
        """
        today = self.today_provider()
        today_key = self.rate_cache.key_for(today)

        cached = self.rate_cache.get(today_key)
        if cached is not None:
            self.reporter.debug(f"Using cached rates {today_key}", context="Currency")
            return cached

        try:
            rates = await self.provider.fetch_rates()
        except RateFetchError as e:
            yesterday_key = self.rate_cache.key_for(today - timedelta(days=1))
            fallback = self.rate_cache.get(yesterday_key)
            if fallback is not None:
                self.reporter.warning(
                    f"Rate fetch failed ({e}); using {yesterday_key}",
                    context="Currency",
                )
            else:
                self.reporter.warning(
                    f"Rate fetch failed ({e}); no cached rates available",
                    context="Currency",
                )
            return fallback

        snapshot = ExchangeRateSnapshot(fetched_on=today, rates=rates)
        self.rate_cache.set(today_key, snapshot)
        self.reporter.info(
            f"Fetched {len(snapshot.rates)} rates for {today.isoformat()}",
            context="Currency",
        )
        return snapshot

    @staticmethod
    def convert(
        amount: Optional[float],
        from_currency: str,
        to_currency: str,
        snapshot: Optional[ExchangeRateSnapshot],
    ) -> Optional[float]:
        """
        Convert amount between two currencies through USD.

        Returns amount unchanged when there is no snapshot, the amount is
        falsy, or both codes match. Returns None when a non-USD side has
        no usable rate.
        """
        source = (from_currency or "").upper()
        target = (to_currency or "").upper()

        if snapshot is None or not amount or source == target:
            return amount

        value = float(amount)

        if source != REFERENCE_CURRENCY:
            rate = snapshot.rate_for(source)
            if not rate:
                return None
            value = value / rate

        if target != REFERENCE_CURRENCY:
            rate = snapshot.rate_for(target)
            if not rate:
                return None
            value = value * rate

        return value

    @staticmethod
    def validate_currency(code: Optional[str]) -> bool:
        """Check a code against the supported currency table."""
        return _is_supported(code)
