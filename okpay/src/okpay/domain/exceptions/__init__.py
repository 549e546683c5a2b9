"""
Domain exceptions package.
"""

from okpay.domain.exceptions.account import (
    AccountNotFoundError,
    InvalidAccountFormatError,
    RegistryUnavailableError,
)
from okpay.domain.exceptions.base import OkpayError, ValidationError
from okpay.domain.exceptions.currency import RateFetchError, UnsupportedCurrencyError
from okpay.domain.exceptions.storage import StorageError
from okpay.domain.exceptions.transfer import (
    InvalidAmountError,
    InvalidRecipientError,
    TransferRejectedError,
)

__all__ = [
    # Base
    "OkpayError",
    "ValidationError",
    # Account
    "InvalidAccountFormatError",
    "AccountNotFoundError",
    "RegistryUnavailableError",
    # Currency
    "UnsupportedCurrencyError",
    "RateFetchError",
    # Storage
    "StorageError",
    # Transfer
    "InvalidRecipientError",
    "InvalidAmountError",
    "TransferRejectedError",
]
