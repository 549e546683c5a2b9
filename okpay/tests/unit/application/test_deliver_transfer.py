"""
Unit tests for BuildTransferDirective and DeliverTransfer.

Usage:
    python okpay/tests/unit/application/test_deliver_transfer.py
    pytest okpay/tests/unit/application/test_deliver_transfer.py
"""

import asyncio
import time
from decimal import Decimal
from unittest.mock import AsyncMock

from shared.reporter import SystemReporter
from shared.tests import LaborantTest

from okpay.application.use_cases import (
    BuildTransferDirective,
    DeliverTransfer,
    DeliveryPolicy,
)
from okpay.domain.exceptions import (
    AccountNotFoundError,
    InvalidAccountFormatError,
    InvalidAmountError,
    InvalidRecipientError,
)
from okpay.domain.results import (
    AccountRecord,
    ChannelRaced,
    ExtensionHandled,
    Invalid,
    InvalidReason,
    RaceTarget,
    Valid,
)
from okpay.domain.services import ExtensionResponse, INavigator
from okpay.domain.value_objects import AccountName, Memo
from okpay.infrastructure.signing import CallbackSigningExtension

MEMO = Memo("kcs-hpos-0001-0002")


class FakeNavigator(INavigator):
    """Records opened URLs; the deep link may hang or be unhandled."""

    def __init__(self, handled: bool = True, deep_link_delay: float = 0.0):
        self.handled = handled
        self.deep_link_delay = deep_link_delay
        self.opened = []

    async def open(self, url: str) -> bool:
        self.opened.append(url)
        if url.startswith("keychain://"):
            if self.deep_link_delay:
                await asyncio.sleep(self.deep_link_delay)
            return self.handled
        return True


class ThreadedNavigator(INavigator):
    """Opens URLs in a worker thread; the deep link outlives the race."""

    def __init__(self, deep_link_delay: float):
        self.deep_link_delay = deep_link_delay
        self.opened = []

    def _open(self, url: str) -> bool:
        if url.startswith("keychain://"):
            time.sleep(self.deep_link_delay)
        self.opened.append(url)
        return True

    async def open(self, url: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._open, url)


class TestDeliverTransfer(LaborantTest):
    """Unit tests for directive gating and channel routing."""

    component_name = "okpay"
    test_category = "unit"

    def setup_test(self):
        self.quiet = SystemReporter(name="test.deliver", console=False)
        self.valid = Valid(AccountRecord(AccountName("alice"), {"name": "alice"}))
        self.directive = BuildTransferDirective().execute(self.valid, 10, MEMO)

    def _deliver(self, navigator, extension=None, policy=DeliveryPolicy.EXTENSION_FIRST):
        return DeliverTransfer(
            navigator=navigator,
            extension=extension,
            policy=policy,
            fallback_seconds=0.05,
            reporter=self.quiet,
        )

    # ================================================================
    # BuildTransferDirective
    # ================================================================

    def test_directive_for_valid_recipient(self):
        """Test alice/10 yields the expected directive."""
        self.reporter.info("Testing directive build", context="Test")

        assert self.directive.to_dict() == {
            "to": "alice",
            "amount": "10.000",
            "asset": "HBD",
            "memo": "kcs-hpos-0001-0002",
        }
        assert self.directive.amount == Decimal("10.000")

    def test_directive_requires_valid_recipient(self):
        """Test missing or Invalid validation raises the matching error."""
        use_case = BuildTransferDirective()
        cases = [
            (None, InvalidRecipientError),
            (Invalid(AccountName(""), InvalidReason.EMPTY), InvalidRecipientError),
            (
                Invalid(AccountName("ab"), InvalidReason.FORMAT),
                InvalidAccountFormatError,
            ),
            (Invalid(AccountName("ghost"), InvalidReason.NOT_FOUND), AccountNotFoundError),
        ]

        for validation, error in cases:
            try:
                use_case.execute(validation, 10, MEMO)
                assert False, f"Should have raised {error.__name__}"
            except error:
                pass

    def test_directive_requires_positive_amount(self):
        """Test zero and garbage amounts raise InvalidAmountError."""
        use_case = BuildTransferDirective()

        for amount in [0, -5, None, "abc"]:
            try:
                use_case.execute(self.valid, amount, MEMO)
                assert False, f"Should have rejected {amount!r}"
            except InvalidAmountError:
                pass

    # ================================================================
    # Extension path
    # ================================================================

    async def test_extension_path_skips_race(self):
        """Test an extension handles the transfer without navigation."""
        self.reporter.info("Testing extension path", context="Test")

        navigator = FakeNavigator()
        extension = AsyncMock()
        extension.request_transfer.return_value = ExtensionResponse(True, "ok")

        outcome = await self._deliver(navigator, extension).execute(self.directive)

        assert outcome == ExtensionHandled(success=True, message="ok")
        extension.request_transfer.assert_awaited_once_with(
            None, "alice", "10.000", "kcs-hpos-0001-0002", "HBD"
        )
        assert navigator.opened == []

    async def test_extension_failure_reported(self):
        """Test an extension rejection becomes a failed outcome."""
        extension = AsyncMock()
        extension.request_transfer.return_value = ExtensionResponse(False, "denied")

        outcome = await self._deliver(FakeNavigator(), extension).execute(
            self.directive
        )

        assert not outcome.success
        assert outcome.message == "denied"

    async def test_crashing_extension_becomes_failed_outcome(self):
        """Test a raising extension entry point never escapes execute."""
        self.reporter.info("Testing crashing extension", context="Test")

        def request_transfer(from_account, to, amount, memo, asset, callback):
            raise RuntimeError("extension crashed")

        navigator = FakeNavigator()
        extension = CallbackSigningExtension(request_transfer, reporter=self.quiet)

        outcome = await self._deliver(navigator, extension).execute(self.directive)

        assert outcome == ExtensionHandled(success=False, message="extension crashed")
        assert navigator.opened == []

    async def test_silent_extension_reaches_terminal_outcome(self):
        """Test an extension that never answers still ends the delivery."""

        def request_transfer(from_account, to, amount, memo, asset, callback):
            pass

        extension = CallbackSigningExtension(
            request_transfer, timeout=0.05, reporter=self.quiet
        )

        outcome = await asyncio.wait_for(
            self._deliver(FakeNavigator(), extension).execute(self.directive), 2
        )

        assert outcome == ExtensionHandled(
            success=False, message="Extension did not respond"
        )

    # ================================================================
    # Deep-link race
    # ================================================================

    async def test_acknowledged_deep_link_wins(self):
        """Test an acknowledged deep link ends on PRIMARY."""
        self.reporter.info("Testing primary deep link", context="Test")

        navigator = FakeNavigator(handled=True)

        outcome = await self._deliver(navigator).execute(self.directive)

        assert isinstance(outcome, ChannelRaced)
        assert outcome.redirected_to == RaceTarget.PRIMARY_DEEP_LINK
        assert outcome.url.startswith("keychain://requestBroadcast?operations=")
        assert len(navigator.opened) == 1

    async def test_timer_fires_fallback(self):
        """Test a hanging deep link falls back after the timer."""
        self.reporter.info("Testing timeout fallback", context="Test")

        navigator = FakeNavigator(handled=True, deep_link_delay=1.0)

        outcome = await self._deliver(navigator).execute(self.directive)

        assert outcome.redirected_to == RaceTarget.FALLBACK_SIGNER
        assert outcome.url.startswith("https://hivesigner.com/sign/transfer?to=alice")
        assert navigator.opened[-1] == outcome.url
        assert len(navigator.opened) == 2

    async def test_late_deep_link_does_not_change_outcome(self):
        """Test a deep link finishing after the timer keeps the fallback."""
        navigator = ThreadedNavigator(deep_link_delay=0.2)

        outcome = await self._deliver(navigator).execute(self.directive)
        await asyncio.sleep(0.4)

        assert outcome.redirected_to == RaceTarget.FALLBACK_SIGNER
        assert navigator.opened[0] == outcome.url
        assert navigator.opened[1].startswith("keychain://")

    async def test_unhandled_deep_link_falls_back(self):
        """Test a not-handled answer opens the fallback immediately."""
        navigator = FakeNavigator(handled=False)

        outcome = await self._deliver(navigator).execute(self.directive)

        assert outcome.used_fallback
        assert len(navigator.opened) == 2

    async def test_always_race_ignores_extension(self):
        """Test ALWAYS_RACE races even with an extension present."""
        self.reporter.info("Testing always_race policy", context="Test")

        navigator = FakeNavigator(handled=True)
        extension = AsyncMock()

        outcome = await self._deliver(
            navigator, extension, policy=DeliveryPolicy.ALWAYS_RACE
        ).execute(self.directive)

        assert outcome.redirected_to == RaceTarget.PRIMARY_DEEP_LINK
        extension.request_transfer.assert_not_called()

    def test_policy_from_string(self):
        """Test policy accepts the settings string."""
        use_case = DeliverTransfer(FakeNavigator(), policy="always_race")
        assert use_case.policy == DeliveryPolicy.ALWAYS_RACE


if __name__ == "__main__":
    TestDeliverTransfer.run_as_main()
