"""Dependency injection."""

from okpay.di.container import Container

__all__ = ["Container"]
