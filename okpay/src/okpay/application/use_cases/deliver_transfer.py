"""
Deliver transfer use case.

Routes a directive to exactly one signing channel:
- the in-process signing extension, when present
- otherwise a native deep link, falling back to the hosted signer when
  nothing acknowledges the link before the timer fires
"""

import asyncio
from enum import Enum
from typing import Optional

from okpay.domain.entities.transfer_directive import TransferDirective
from okpay.domain.results.delivery_outcome import (
    ChannelRaced,
    DeliveryOutcome,
    ExtensionHandled,
    RaceTarget,
)
from okpay.domain.services.i_navigator import INavigator
from okpay.domain.services.i_signing_extension import ISigningExtension
from okpay.infrastructure.hive.signing_links import (
    build_keychain_deep_link,
    build_signer_url,
)
from okpay.infrastructure.monitoring.metrics import deliveries_total
from shared.reporter import SystemReporter


class DeliveryPolicy(str, Enum):
    """How the extension and the deep-link race relate."""

    EXTENSION_FIRST = "extension_first"
    ALWAYS_RACE = "always_race"


class DeliverTransfer:
    """Use case for handing a directive to a signer."""

    def __init__(
        self,
        navigator: INavigator,
        extension: Optional[ISigningExtension] = None,
        policy: DeliveryPolicy = DeliveryPolicy.EXTENSION_FIRST,
        fallback_seconds: float = 1.2,
        keychain_scheme: str = "keychain",
        signer_url: str = "https://hivesigner.com/sign/transfer",
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize use case.

        Args:
            navigator: URL opener used for the deep link and the fallback
            extension: Optional in-process signing extension
            policy: EXTENSION_FIRST skips the race when an extension exists
            fallback_seconds: Time the deep link has to be acknowledged
            keychain_scheme: Deep-link scheme
            signer_url: Hosted signer transfer page
            reporter: Optional SystemReporter for logging
        """
        self.navigator = navigator
        self.extension = extension
        self.policy = DeliveryPolicy(policy)
        self.fallback_seconds = fallback_seconds
        self.keychain_scheme = keychain_scheme
        self.signer_url = signer_url
        self.reporter = reporter or SystemReporter(name="deliver_transfer", verbose=1)

    async def execute(self, directive: TransferDirective) -> DeliveryOutcome:
        """
        Deliver the directive.

        Returns:
            ExtensionHandled when the extension took it, else ChannelRaced
            naming the URL the race settled on
        """
        if self.extension is not None and self.policy == DeliveryPolicy.EXTENSION_FIRST:
            outcome = await self._via_extension(directive)
        else:
            outcome = await self._race(directive)

        deliveries_total.labels(channel=outcome.channel).inc()
        return outcome

    async def _via_extension(self, directive: TransferDirective) -> ExtensionHandled:
        response = await self.extension.request_transfer(
            None,
            directive.to.value,
            directive.amount_str,
            directive.memo.value,
            directive.asset,
        )

        if response.success:
            self.reporter.info(
                f"Extension accepted {directive.amount_with_unit} to {directive.to}",
                context="DeliverTransfer",
            )
        else:
            self.reporter.warning(
                f"Extension rejected transfer: {response.message}",
                context="DeliverTransfer",
            )
        return ExtensionHandled(success=response.success, message=response.message)

    async def _race(self, directive: TransferDirective) -> ChannelRaced:
        primary = build_keychain_deep_link(directive, self.keychain_scheme)
        fallback = build_signer_url(directive, self.signer_url)

        # A timeout cancels only the await. A navigator backed by a worker
        # thread may still open the deep link after the fallback.
        try:
            handled = await asyncio.wait_for(
                self.navigator.open(primary), timeout=self.fallback_seconds
            )
        except asyncio.TimeoutError:
            handled = False
            self.reporter.info(
                f"Deep link not acknowledged within {self.fallback_seconds}s",
                context="DeliverTransfer",
            )

        if handled:
            return ChannelRaced(redirected_to=RaceTarget.PRIMARY_DEEP_LINK, url=primary)

        self.reporter.info("Opening hosted signer fallback", context="DeliverTransfer")
        await self.navigator.open(fallback)
        return ChannelRaced(redirected_to=RaceTarget.FALLBACK_SIGNER, url=fallback)
