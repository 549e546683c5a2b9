"""
Domain value objects.
"""

from okpay.domain.value_objects.account_name import (
    MAX_ACCOUNT_LENGTH,
    MIN_ACCOUNT_LENGTH,
    AccountName,
    sanitize_account,
)
from okpay.domain.value_objects.currency import (
    REFERENCE_CURRENCY,
    SUPPORTED_CURRENCIES,
    Currency,
    get_currency,
    validate_currency,
)
from okpay.domain.value_objects.exchange_rate_snapshot import ExchangeRateSnapshot
from okpay.domain.value_objects.memo import Memo, generate_memo

__all__ = [
    "AccountName",
    "sanitize_account",
    "MAX_ACCOUNT_LENGTH",
    "MIN_ACCOUNT_LENGTH",
    "Currency",
    "SUPPORTED_CURRENCIES",
    "REFERENCE_CURRENCY",
    "get_currency",
    "validate_currency",
    "ExchangeRateSnapshot",
    "Memo",
    "generate_memo",
]
