"""Signing channel adapters."""

from okpay.infrastructure.signing.browser_navigator import BrowserNavigator
from okpay.infrastructure.signing.callback_extension_adapter import (
    CallbackSigningExtension,
    CallbackTransferFn,
    parse_extension_response,
)

__all__ = [
    "BrowserNavigator",
    "CallbackSigningExtension",
    "CallbackTransferFn",
    "parse_extension_response",
]
