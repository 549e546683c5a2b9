"""Caching layer."""

from okpay.infrastructure.cache.rate_cache import DEFAULT_PREFIX, RateCache

__all__ = ["RateCache", "DEFAULT_PREFIX"]
