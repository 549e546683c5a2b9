"""
Date-keyed exchange-rate cache.

Best-effort layer over a key-value store: one snapshot per calendar day
under ``prefix + YYYY-MM-DD``. Storage and decoding failures are logged
and behave as a miss (get) or a no-op (set).
"""

import json
from datetime import date
from typing import Optional

from okpay.domain.services.i_key_value_store import IKeyValueStore
from okpay.domain.value_objects.exchange_rate_snapshot import ExchangeRateSnapshot
from okpay.infrastructure.monitoring.metrics import rate_cache_events_total
from shared.reporter import SystemReporter

DEFAULT_PREFIX = "okpay_rates_"


class RateCache:
    """Snapshot cache keyed by purpose prefix and calendar date."""

    def __init__(
        self,
        store: IKeyValueStore,
        prefix: str = DEFAULT_PREFIX,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize rate cache.

        Args:
            store: Backing key-value store
            prefix: Key prefix shared by all rate entries
            reporter: Optional SystemReporter for logging
        """
        self.store = store
        self.prefix = prefix
        self.reporter = reporter or SystemReporter(name="rate_cache", verbose=1)

    def key_for(self, day: date) -> str:
        """Cache key for a calendar day."""
        return f"{self.prefix}{day.isoformat()}"

    def get(self, key: str) -> Optional[ExchangeRateSnapshot]:
        """
        Read a snapshot.

        Returns:
            Cached snapshot, or None on miss or any read failure
        """
        try:
            raw = self.store.get(key)
        except Exception as e:
            self.reporter.warning(f"Cache read failed: {e}", context="RateCache")
            rate_cache_events_total.labels(event="read_error").inc()
            return None

        if raw is None:
            rate_cache_events_total.labels(event="miss").inc()
            return None

        try:
            snapshot = ExchangeRateSnapshot.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            self.reporter.warning(
                f"Discarding corrupt cache entry {key}: {e}", context="RateCache"
            )
            rate_cache_events_total.labels(event="corrupt").inc()
            return None

        rate_cache_events_total.labels(event="hit").inc()
        return snapshot

    def set(self, key: str, snapshot: ExchangeRateSnapshot) -> None:
        """Store a snapshot; failures are logged and ignored."""
        try:
            self.store.set(key, json.dumps(snapshot.to_dict()))
        except Exception as e:
            self.reporter.warning(f"Cache write failed: {e}", context="RateCache")
            rate_cache_events_total.labels(event="write_error").inc()
            return

        self.reporter.debug(f"Cached rates under {key}", context="RateCache")
