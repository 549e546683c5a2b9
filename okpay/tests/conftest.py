"""
Test fixtures and configuration.
"""

import os

import pytest

from okpay.config.settings import reset_settings

os.environ.setdefault("OKPAY_ENV", "test")


@pytest.fixture(autouse=True)
def clean_settings():
    """Each test starts without a cached settings singleton."""
    reset_settings()
    yield
    reset_settings()
