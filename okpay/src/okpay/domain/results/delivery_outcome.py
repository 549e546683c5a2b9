"""
Transfer delivery outcomes.

Exactly one delivery path runs per submission; its terminal state is
one of these variants.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from okpay.domain.exceptions import TransferRejectedError


class RaceTarget(str, Enum):
    """Which URL the deep-link race ended on."""

    PRIMARY_DEEP_LINK = "primary_deep_link"
    FALLBACK_SIGNER = "fallback_signer"


@dataclass(frozen=True)
class ExtensionHandled:
    """The in-process signing extension took the transfer."""

    success: bool
    message: str = ""

    @property
    def channel(self) -> str:
        return "extension"

    def raise_for_failure(self) -> None:
        """
        Raises:
            TransferRejectedError: If the extension reported failure
        """
        if not self.success:
            raise TransferRejectedError(self.message or "unknown error")


@dataclass(frozen=True)
class ChannelRaced:
    """The deep link was opened; the race settled on one of two URLs."""

    redirected_to: RaceTarget
    url: str

    @property
    def channel(self) -> str:
        return self.redirected_to.value

    @property
    def used_fallback(self) -> bool:
        return self.redirected_to == RaceTarget.FALLBACK_SIGNER

    def raise_for_failure(self) -> None:
        """Navigation outcomes carry no failure signal."""


DeliveryOutcome = Union[ExtensionHandled, ChannelRaced]
