"""
Build payment link use case.

Produces the URL a merchant turns into a scannable code.
"""

import math
from typing import Optional, Union
from urllib.parse import urlencode

from okpay.domain.exceptions import (
    InvalidAccountFormatError,
    InvalidAmountError,
    UnsupportedCurrencyError,
)
from okpay.domain.value_objects.account_name import AccountName
from okpay.domain.value_objects.currency import validate_currency


def _format_amount(amount) -> str:
    """Shortest plain decimal form, e.g. 5 -> "5", 12.50 -> "12.5"."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise InvalidAmountError(amount)
    if isinstance(amount, bool) or not math.isfinite(value) or value <= 0:
        raise InvalidAmountError(amount)
    return f"{value:.8f}".rstrip("0").rstrip(".")


class BuildPaymentLink:
    """
    Assemble ``<base>?vendor=<account>[&amount=..][&cur=..]``.

    Example:
        BuildPaymentLink("https://pay.example").execute("alice", 5, "eur")
        -> "https://pay.example?vendor=alice&amount=5&cur=EUR"
    """

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def execute(
        self,
        to: Optional[str],
        amount: Union[float, int, str, None] = None,
        currency: Optional[str] = None,
    ) -> str:
        """
        Build the link.

        Raises:
            InvalidAccountFormatError: If a non-empty recipient is malformed
            InvalidAmountError: If an amount is given but not positive
            UnsupportedCurrencyError: If currency is given but unsupported
        """
        name = AccountName.from_raw(to)
        if name.is_empty():
            return self.base_url
        if not name.is_well_formed():
            raise InvalidAccountFormatError(name.value)

        params = [("vendor", name.value)]

        if amount is not None and str(amount).strip() != "":
            params.append(("amount", _format_amount(amount)))

        if currency:
            if not validate_currency(currency):
                raise UnsupportedCurrencyError(currency)
            params.append(("cur", currency.upper()))

        return f"{self.base_url}?{urlencode(params)}"
