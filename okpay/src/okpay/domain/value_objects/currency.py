"""
Currency value objects - supported fiat currencies for amount entry.
"""

from dataclasses import dataclass
from typing import Dict, Optional

REFERENCE_CURRENCY = "USD"


@dataclass(frozen=True)
class Currency:
    """
    Value object describing a fiat currency users can enter amounts in.

    Business rules:
    - Code is a 3-letter upper-case ISO-like code
    - Rates for every currency are expressed relative to USD
    """

    code: str
    name: str
    symbol: str

    def __post_init__(self):
        """Validate currency on creation."""
        if len(self.code) != 3 or not self.code.isalpha() or not self.code.isupper():
            raise ValueError(f"Invalid currency code: {self.code!r}")
        if not self.name:
            raise ValueError("Currency name is required")
        if not self.symbol:
            raise ValueError("Currency symbol is required")

    @property
    def is_reference(self) -> bool:
        """True for the currency every rate is relative to."""
        return self.code == REFERENCE_CURRENCY

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {"code": self.code, "name": self.name, "symbol": self.symbol}

    def __str__(self) -> str:
        return self.code


SUPPORTED_CURRENCIES: Dict[str, Currency] = {
    c.code: c
    for c in (
        Currency("USD", "US Dollar", "$"),
        Currency("EUR", "Euro", "€"),
        Currency("GBP", "British Pound", "£"),
        Currency("CAD", "Canadian Dollar", "C$"),
        Currency("AUD", "Australian Dollar", "A$"),
        Currency("ARS", "Argentine Peso", "$"),
        Currency("MXN", "Mexican Peso", "$"),
        Currency("COP", "Colombian Peso", "$"),
        Currency("BRL", "Brazilian Real", "R$"),
        Currency("NGN", "Nigerian Naira", "₦"),
        Currency("GTQ", "Guatemalan Quetzal", "Q"),
    )
}


def validate_currency(code: Optional[str]) -> bool:
    """True iff the upper-cased code is in the supported table."""
    return bool(code) and code.upper() in SUPPORTED_CURRENCIES


def get_currency(code: str) -> Optional[Currency]:
    """Look up a supported currency by code (case-insensitive)."""
    if not code:
        return None
    return SUPPORTED_CURRENCIES.get(code.upper())
