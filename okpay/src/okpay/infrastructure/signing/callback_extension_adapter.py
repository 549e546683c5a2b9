"""
Callback-style signing extension adapter.

Wallet extensions expose ``request_transfer(from, to, amount, memo,
asset, callback)`` and report back by calling ``callback(response)``
once, possibly from another thread. This adapter turns that into an
awaitable returning ExtensionResponse.
"""

import asyncio
from typing import Any, Callable, Optional

from okpay.domain.services.i_signing_extension import (
    ExtensionResponse,
    ISigningExtension,
)
from shared.reporter import SystemReporter

TransferCallback = Callable[[Any], None]
CallbackTransferFn = Callable[
    [Optional[str], str, str, str, str, TransferCallback], None
]


def parse_extension_response(response: Any) -> ExtensionResponse:
    """
    Normalize whatever the extension handed to its callback.

    Accepts a mapping with ``success`` and ``message`` (or ``error``)
    keys, an object with those attributes, or a bare truthy value.
    """
    if isinstance(response, ExtensionResponse):
        return response

    if isinstance(response, dict):
        success = bool(response.get("success"))
        message = response.get("message") or response.get("error") or ""
    elif hasattr(response, "success"):
        success = bool(getattr(response, "success"))
        message = getattr(response, "message", "") or ""
    else:
        success = bool(response)
        message = ""

    return ExtensionResponse(success=success, message=str(message))


class CallbackSigningExtension(ISigningExtension):
    """
    Await a callback-style extension.

    Example:
        extension = CallbackSigningExtension(keychain.request_transfer)
        response = await extension.request_transfer(
            None, "alice", "10.000", "kcs-hpos-0001-0002", "HBD"
        )
    """

    def __init__(
        self,
        request_transfer_fn: CallbackTransferFn,
        timeout: float = 120.0,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize adapter.

        Args:
            request_transfer_fn: Extension entry point taking a trailing
                callback argument
            timeout: Seconds to wait for the callback before giving up
            reporter: Optional SystemReporter for logging
        """
        self._request_transfer = request_transfer_fn
        self.timeout = timeout
        self.reporter = reporter or SystemReporter(name="signing_extension", verbose=1)

    async def request_transfer(
        self,
        from_account: Optional[str],
        to: str,
        amount: str,
        memo: str,
        asset: str,
    ) -> ExtensionResponse:
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def _resolve(response: Any) -> None:
            if not future.done():
                future.set_result(response)

        def _callback(response: Any) -> None:
            loop.call_soon_threadsafe(_resolve, response)

        self.reporter.info(
            f"Requesting extension transfer of {amount} {asset} to {to}",
            context="SigningExtension",
        )
        try:
            self._request_transfer(from_account, to, amount, memo, asset, _callback)
        except Exception as e:
            self.reporter.error(
                f"Extension request failed: {e}", context="SigningExtension"
            )
            return ExtensionResponse(success=False, message=str(e))

        try:
            raw = await asyncio.wait_for(future, timeout=self.timeout)
        except asyncio.TimeoutError:
            self.reporter.warning(
                f"Extension did not respond within {self.timeout}s",
                context="SigningExtension",
            )
            return ExtensionResponse(
                success=False, message="Extension did not respond"
            )

        result = parse_extension_response(raw)
        if not result.success:
            self.reporter.warning(
                f"Extension rejected transfer: {result.message}",
                context="SigningExtension",
            )
        return result
