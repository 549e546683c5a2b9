"""
Signing extension interface.

An in-process signer (wallet extension or bridge) that can broadcast a
transfer on the user's behalf and report back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExtensionResponse:
    """Result reported by the signing extension."""

    success: bool
    message: str = ""


class ISigningExtension(ABC):
    """Abstract interface for an in-process signing capability."""

    @abstractmethod
    async def request_transfer(
        self,
        from_account: Optional[str],
        to: str,
        amount: str,
        memo: str,
        asset: str,
    ) -> ExtensionResponse:
        """
        Ask the extension to sign and broadcast a transfer.

        Args:
            from_account: Sending account, or None to let the user pick
            to: Destination account
            amount: Amount with 3 fractional digits, e.g. "10.000"
            memo: Transfer memo
            asset: Asset symbol, e.g. "HBD"

        Returns:
            ExtensionResponse with success flag and message
        """
