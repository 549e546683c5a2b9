"""
Payment query parser.

Reads the prefill parameters a payment link carries: ``vendor`` or
``to`` for the recipient, ``amount`` and ``cur``.
"""

import math
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qsl, urlsplit

from okpay.domain.value_objects.account_name import sanitize_account
from okpay.domain.value_objects.currency import validate_currency


@dataclass(frozen=True)
class PaymentQuery:
    """Prefill values recovered from a payment link."""

    to: str = ""
    amount: Optional[float] = None
    currency: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.to and self.amount is None and self.currency is None


def _positive_amount(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def parse_payment_query(url_or_query: Optional[str]) -> PaymentQuery:
    """
    Parse a payment link or bare query string.

    ``vendor`` is read first and ``to`` second, so ``to`` wins when both
    are present. Unparseable amounts and unsupported currencies are
    dropped rather than rejected.
    """
    if not url_or_query:
        return PaymentQuery()

    query = url_or_query
    if "?" in query or "://" in query:
        query = urlsplit(query).query
    query = query.lstrip("?")

    params = {}
    for name, value in parse_qsl(query, keep_blank_values=True):
        params.setdefault(name, value)

    to = ""
    for name in ("vendor", "to"):
        if params.get(name):
            to = sanitize_account(params[name])

    amount = _positive_amount(params["amount"]) if "amount" in params else None

    currency = None
    cur = params.get("cur", "").strip().upper()
    if cur and validate_currency(cur):
        currency = cur

    return PaymentQuery(to=to, amount=amount, currency=currency)
