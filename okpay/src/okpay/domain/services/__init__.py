"""
Domain service interfaces.
"""

from okpay.domain.services.i_account_registry import IAccountRegistry
from okpay.domain.services.i_exchange_rate_provider import IExchangeRateProvider
from okpay.domain.services.i_key_value_store import IKeyValueStore
from okpay.domain.services.i_navigator import INavigator
from okpay.domain.services.i_signing_extension import (
    ExtensionResponse,
    ISigningExtension,
)

__all__ = [
    "IAccountRegistry",
    "IExchangeRateProvider",
    "IKeyValueStore",
    "INavigator",
    "ISigningExtension",
    "ExtensionResponse",
]
