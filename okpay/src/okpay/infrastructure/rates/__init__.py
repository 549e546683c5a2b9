"""Exchange-rate adapters."""

from okpay.infrastructure.rates.exchange_rate_client import ExchangeRateClient

__all__ = ["ExchangeRateClient"]
