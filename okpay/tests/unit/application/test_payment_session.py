"""
Unit tests for PaymentSession.

Covers the full flow from typed input to a delivered transfer with
in-memory adapters.

Usage:
    python okpay/tests/unit/application/test_payment_session.py
    pytest okpay/tests/unit/application/test_payment_session.py
"""

import asyncio
import json
from datetime import date
from unittest.mock import AsyncMock
from urllib.parse import unquote

from shared.reporter import SystemReporter
from shared.tests import LaborantTest

from okpay.application.services import CurrencyConverter, MemoProvider, PaymentQuery
from okpay.application.session import PaymentSession, parse_amount
from okpay.application.use_cases import (
    BuildTransferDirective,
    DeliverTransfer,
    ValidateAccount,
)
from okpay.domain.exceptions import (
    InvalidAmountError,
    InvalidRecipientError,
    RateFetchError,
)
from okpay.domain.results import InvalidReason, RaceTarget, Valid
from okpay.domain.services import INavigator
from okpay.infrastructure.cache import RateCache
from okpay.infrastructure.storage import InMemoryKeyValueStore


class RecordingNavigator(INavigator):
    def __init__(self):
        self.opened = []

    async def open(self, url: str) -> bool:
        self.opened.append(url)
        return True


class TestPaymentSession(LaborantTest):
    """Unit tests for the application state coordinator."""

    component_name = "okpay"
    test_category = "unit"

    def setup_test(self):
        quiet = SystemReporter(name="test.session", console=False)

        self.registry = AsyncMock()
        self.registry.get_accounts.side_effect = self._lookup
        self.provider = AsyncMock()
        self.provider.fetch_rates.return_value = {"ARS": 900.0, "EUR": 0.5}
        self.navigator = RecordingNavigator()
        self.session_store = InMemoryKeyValueStore()

        self.session = PaymentSession(
            validate_account=ValidateAccount(self.registry, reporter=quiet),
            converter=CurrencyConverter(
                self.provider,
                RateCache(InMemoryKeyValueStore(), reporter=quiet),
                today_provider=lambda: date(2024, 3, 5),
                reporter=quiet,
            ),
            memo_provider=MemoProvider(self.session_store, reporter=quiet),
            build_directive=BuildTransferDirective(),
            deliver_transfer=DeliverTransfer(
                self.navigator, fallback_seconds=0.05, reporter=quiet
            ),
            debounce_seconds=0.01,
            reporter=quiet,
        )

    @staticmethod
    async def _lookup(names):
        known = {"alice", "bob-1"}
        return [{"name": name} for name in names if name in known]

    # ================================================================
    # Recipient input
    # ================================================================

    async def test_valid_account_end_to_end(self):
        """Test typing alice and 10 produces the expected transfer."""
        self.reporter.info("Testing alice end-to-end", context="Test")

        await self.session.start()
        shown = self.session.set_account_input("  Alice ")
        result = await self.session.wait_for_validation()

        assert shown == "alice"
        assert isinstance(result, Valid)
        assert self.session.status_text == "Account valid"

        self.session.set_settlement_amount("10")
        assert self.session.can_submit

        outcome = await self.session.submit()

        assert outcome.redirected_to == RaceTarget.PRIMARY_DEEP_LINK
        operations = json.loads(unquote(outcome.url.split("operations=", 1)[1]))
        assert operations[1]["to"] == "alice"
        assert operations[1]["amount"] == "10.000 HBD"
        assert operations[1]["memo"] == self.session.memo.value
        self.reporter.info("Transfer delivered via deep link", context="Test")

    async def test_malformed_input_no_registry_call(self):
        """Test 'xx' yields FORMAT and never hits the registry."""
        await self.session.start()
        self.session.set_account_input("xx")
        result = await self.session.wait_for_validation()

        assert result.reason == InvalidReason.FORMAT
        assert self.session.status_text == "Invalid account"
        self.registry.get_accounts.assert_not_called()

    async def test_debounce_validates_last_input_only(self):
        """Test a burst of keystrokes triggers one lookup."""
        self.reporter.info("Testing debounced typing", context="Test")

        await self.session.start()
        for partial in ["ali", "alic", "alice"]:
            self.session.set_account_input(partial)
        await self.session.wait_for_validation()

        self.registry.get_accounts.assert_awaited_once_with(["alice"])
        assert self.session.validation.is_valid

    async def test_stale_result_does_not_update_status(self):
        """Test a slow lookup for an old candidate is ignored."""
        release = asyncio.Event()

        async def slow_lookup(names):
            if names == ["alice"]:
                await release.wait()
            return await self._lookup(names)

        self.registry.get_accounts.side_effect = slow_lookup
        await self.session.start()

        alice = asyncio.ensure_future(self.session.validate_now("alice"))
        await asyncio.sleep(0)
        await self.session.validate_now("ghost")
        release.set()

        assert await alice is None
        assert self.session.status_text == "Account not found"

    async def test_clearing_input_resets_status(self):
        """Test empty input clears validation without a lookup."""
        await self.session.start()
        self.session.set_account_input("alice")
        await self.session.wait_for_validation()

        self.session.set_account_input("")

        assert self.session.validation is None
        assert self.session.status_text == ""
        assert not self.session.can_submit

    async def test_editing_input_invalidates_previous_result(self):
        """Test a changed candidate cannot submit on the old result."""
        await self.session.start()
        self.session.set_account_input("alice")
        await self.session.wait_for_validation()
        self.session.set_settlement_amount("5")

        self.session.set_account_input("alicex")

        assert not self.session.can_submit
        await self.session.close()

    # ================================================================
    # Amounts and currency
    # ================================================================

    async def test_local_amount_converts_to_settlement(self):
        """Test ARS 1000 at 900 per USD is 1.11 settlement."""
        self.reporter.info("Testing ARS conversion", context="Test")

        await self.session.start()

        assert self.session.set_currency("ars")
        settlement = self.session.set_local_amount("1000")

        assert settlement == 1.11
        assert self.session.amounts.settlement_amount == 1.11
        assert self.session.amounts.is_local_mode

    async def test_settlement_amount_converts_to_local(self):
        """Test editing the settlement side updates the local side."""
        await self.session.start()
        self.session.set_currency("EUR")

        self.session.set_settlement_amount("3")

        assert self.session.local_amount == 1.5

    async def test_currency_switch_recomputes_local(self):
        """Test switching currency converts the existing amount."""
        await self.session.start()
        self.session.set_settlement_amount("10")

        self.session.set_currency("EUR")

        assert self.session.local_amount == 5.0
        assert self.session.set_currency("USD")
        assert self.session.local_amount is None
        assert not self.session.is_local_mode

    async def test_no_snapshot_disables_local_mode(self):
        """Test without rates only USD is accepted."""
        self.provider.fetch_rates.side_effect = RateFetchError("down")
        await self.session.start()

        assert self.session.snapshot is None
        assert not self.session.set_currency("EUR")
        assert self.session.currency == "USD"

        self.session.set_local_amount("7")
        assert self.session.settlement_amount == 7.0

    async def test_unsupported_currency_refused(self):
        """Test unsupported codes keep the current mode."""
        await self.session.start()

        assert not self.session.set_currency("JPY")
        assert not self.session.set_currency("MXN")
        assert self.session.currency == "USD"

    def test_parse_amount(self):
        """Test lenient amount parsing."""
        assert parse_amount("12.5") == 12.5
        assert parse_amount(" 3 ") == 3.0
        assert parse_amount("") is None
        assert parse_amount("abc") is None
        assert parse_amount("inf") is None
        assert parse_amount(None) is None

    # ================================================================
    # Start and submission gating
    # ================================================================

    async def test_start_applies_query(self):
        """Test link prefill sets currency, amount and validates recipient."""
        self.reporter.info("Testing query prefill", context="Test")

        await self.session.start(PaymentQuery(to="bob-1", amount=1800, currency="ARS"))

        assert self.session.currency == "ARS"
        assert self.session.local_amount == 1800
        assert self.session.settlement_amount == 2.0
        assert self.session.account_input.value == "bob-1"
        assert self.session.validation.is_valid
        assert self.session.can_submit

    async def test_start_selects_default_currency(self):
        """Test the configured default currency applies unless the link names one."""
        self.session.default_currency = "EUR"

        await self.session.start()
        assert self.session.currency == "EUR"
        assert self.session.is_local_mode

        await self.session.start(PaymentQuery(currency="ARS"))
        assert self.session.currency == "ARS"

    async def test_default_currency_needs_rates(self):
        """Test the default currency is refused without a snapshot."""
        self.session.default_currency = "EUR"
        self.provider.fetch_rates.side_effect = RateFetchError("down")

        await self.session.start()

        assert self.session.currency == "USD"

    async def test_memo_reused_across_submissions(self):
        """Test one memo per session."""
        await self.session.start()
        memo = self.session.memo
        await self.session.validate_now("alice")
        self.session.set_settlement_amount("1")

        await self.session.submit()
        await self.session.submit()

        assert self.session.memo == memo
        assert self.session_store.get("okpay_memo") == memo.value
        assert all(memo.value in url for url in self.navigator.opened)

    async def test_submit_gates(self):
        """Test submission raises for missing recipient or amount."""
        await self.session.start()

        try:
            await self.session.submit()
            assert False, "Should have raised InvalidRecipientError"
        except InvalidRecipientError:
            pass

        await self.session.validate_now("alice")
        self.session.set_settlement_amount("0")

        try:
            await self.session.submit()
            assert False, "Should have raised InvalidAmountError"
        except InvalidAmountError:
            pass

        assert self.navigator.opened == []


if __name__ == "__main__":
    TestPaymentSession.run_as_main()
