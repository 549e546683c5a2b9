"""
ExchangeRateSnapshot value object - immutable, dated table of rates.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping, Optional

from okpay.domain.value_objects.currency import REFERENCE_CURRENCY


@dataclass(frozen=True)
class ExchangeRateSnapshot:
    """
    Rates keyed by currency code, relative to USD, fetched on one day.

    Business rules:
    - USD is always 1.0, whether or not the source listed it
    - Rates are finite floats; non-numeric entries are dropped on load
    - Immutable once built; a fresh fetch produces a new snapshot
    """

    fetched_on: date
    rates: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        """Freeze rates and pin the reference currency."""
        cleaned = {}
        for code, rate in dict(self.rates).items():
            if isinstance(rate, bool) or not isinstance(rate, (int, float)):
                continue
            if not math.isfinite(rate):
                continue
            cleaned[str(code).upper()] = float(rate)
        cleaned[REFERENCE_CURRENCY] = 1.0
        object.__setattr__(self, "rates", MappingProxyType(cleaned))

    def rate_for(self, code: str) -> Optional[float]:
        """Rate for a currency code, or None when not listed."""
        return self.rates.get(code.upper())

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {"date": self.fetched_on.isoformat(), "rates": dict(self.rates)}

    @classmethod
    def from_dict(cls, data: dict) -> "ExchangeRateSnapshot":
        """
        Rebuild a snapshot from to_dict() output.

        Raises:
            ValueError: If the date or rates are missing or malformed
        """
        if not isinstance(data, dict):
            raise ValueError("Snapshot payload must be an object")
        rates = data.get("rates")
        if not isinstance(rates, dict):
            raise ValueError("Snapshot payload has no rates table")
        return cls(fetched_on=date.fromisoformat(data["date"]), rates=rates)
