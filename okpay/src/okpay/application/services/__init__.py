"""Application services."""

from okpay.application.services.currency_converter import CurrencyConverter
from okpay.application.services.debouncer import Debouncer
from okpay.application.services.memo_provider import DEFAULT_MEMO_KEY, MemoProvider
from okpay.application.services.payment_query import (
    PaymentQuery,
    parse_payment_query,
)
from okpay.application.services.staleness_guard import StalenessGuard

__all__ = [
    "CurrencyConverter",
    "Debouncer",
    "MemoProvider",
    "DEFAULT_MEMO_KEY",
    "PaymentQuery",
    "parse_payment_query",
    "StalenessGuard",
]
