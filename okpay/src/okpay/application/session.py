"""
Payment session - application state for one checkout.

Holds what a payment form shows: the recipient candidate and its
validation status, the amount pair in local and settlement currency, the
rate snapshot, and the session memo. Input handlers mutate this state;
submit() turns it into a delivered transfer.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from okpay.application.services.currency_converter import CurrencyConverter
from okpay.application.services.debouncer import Debouncer
from okpay.application.services.memo_provider import MemoProvider
from okpay.application.services.payment_query import PaymentQuery
from okpay.application.services.staleness_guard import StalenessGuard
from okpay.application.use_cases.build_transfer_directive import (
    BuildTransferDirective,
)
from okpay.application.use_cases.deliver_transfer import DeliverTransfer
from okpay.application.use_cases.validate_account import ValidateAccount
from okpay.domain.results.delivery_outcome import DeliveryOutcome
from okpay.domain.results.validation_result import Valid, ValidationResult
from okpay.domain.value_objects.account_name import AccountName
from okpay.domain.value_objects.currency import REFERENCE_CURRENCY, get_currency
from okpay.domain.value_objects.exchange_rate_snapshot import ExchangeRateSnapshot
from okpay.domain.value_objects.memo import Memo
from shared.reporter import SystemReporter

DISPLAY_DECIMALS = 2


def parse_amount(text: Union[str, float, int, None]) -> Optional[float]:
    """Lenient numeric parse for form input; blank or garbage is None."""
    if text is None or isinstance(text, bool):
        return None
    try:
        value = float(str(text).strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def round_display(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return round(value, DISPLAY_DECIMALS)


@dataclass(frozen=True)
class AmountPair:
    """Both sides of the amount input."""

    local_amount: Optional[float]
    local_currency: str
    settlement_amount: Optional[float]
    settlement_currency: str = REFERENCE_CURRENCY

    @property
    def is_local_mode(self) -> bool:
        return self.local_currency != self.settlement_currency


class PaymentSession:
    """
    Application state coordinator.

    Without a rate snapshot the session stays in settlement mode: the
    settlement amount is the only input and set_currency() refuses every
    code but USD.
    """

    def __init__(
        self,
        validate_account: ValidateAccount,
        converter: CurrencyConverter,
        memo_provider: MemoProvider,
        build_directive: BuildTransferDirective,
        deliver_transfer: DeliverTransfer,
        debounce_seconds: float = 0.3,
        default_currency: str = REFERENCE_CURRENCY,
        guard: Optional[StalenessGuard] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize session.

        Args:
            validate_account: Registry validation use case
            converter: Rate snapshot loader and converter
            memo_provider: Session memo source
            build_directive: Submission gate
            deliver_transfer: Signing channel router
            debounce_seconds: Quiet period before validating input
            default_currency: Local currency selected on start when the
                link does not name one
            guard: Staleness guard (a fresh one by default)
            reporter: Optional SystemReporter for logging
        """
        self.validate_account = validate_account
        self.converter = converter
        self.memo_provider = memo_provider
        self.build_directive = build_directive
        self.deliver_transfer = deliver_transfer
        self.default_currency = default_currency.upper()
        self.guard = guard or StalenessGuard()
        self.debouncer = Debouncer(debounce_seconds, self.validate_now)
        self.reporter = reporter or SystemReporter(name="payment_session", verbose=1)

        self.account_input = AccountName("")
        self.validation: Optional[ValidationResult] = None
        self.status_text = ""

        self.snapshot: Optional[ExchangeRateSnapshot] = None
        self.currency = REFERENCE_CURRENCY
        self.local_amount: Optional[float] = None
        self.settlement_amount: Optional[float] = None

        self.memo: Optional[Memo] = None
        self.last_outcome: Optional[DeliveryOutcome] = None

    # ================================================================
    # Lifecycle
    # ================================================================

    async def start(self, query: Optional[PaymentQuery] = None) -> None:
        """
        Load rates and memo, then apply the default currency and link
        prefill values.

        A prefilled recipient is validated immediately, without debounce.
        """
        self.snapshot = await self.converter.fetch_snapshot()
        self.memo = self.memo_provider.get_or_create()

        if self.snapshot is None:
            self.reporter.warning(
                "No exchange rates; local currency input disabled",
                context="PaymentSession",
            )

        query = query or PaymentQuery()
        currency = query.currency or self.default_currency
        if currency != REFERENCE_CURRENCY:
            self.set_currency(currency)

        if query.is_empty:
            return

        if query.amount is not None:
            if self.is_local_mode:
                self.set_local_amount(query.amount)
            else:
                self.set_settlement_amount(query.amount)
        if query.to:
            self.account_input = AccountName.from_raw(query.to)
            await self.validate_now(self.account_input.value)

    async def close(self) -> None:
        self.debouncer.cancel()

    # ================================================================
    # Recipient
    # ================================================================

    def set_account_input(self, raw: Optional[str]) -> str:
        """
        Handle a keystroke in the recipient field.

        Returns:
            The sanitized value the field should show
        """
        name = AccountName.from_raw(raw)
        changed = name != self.account_input
        self.account_input = name

        if name.is_empty():
            self.debouncer.cancel()
            self.guard.reset()
            self.validation = None
            self.status_text = ""
            return name.value

        if changed:
            self.validation = None
        self.debouncer.trigger(name.value)
        return name.value

    async def validate_now(self, candidate: str) -> Optional[ValidationResult]:
        """
        Validate candidate under the staleness guard.

        Returns:
            The result, or None when it was superseded and dropped
        """
        result = await self.guard.run(candidate, self.validate_account.execute)
        if result is None:
            self.reporter.debug(
                f"Dropped stale validation for {candidate}", context="PaymentSession"
            )
            return None

        self.validation = result
        self.status_text = result.status_text
        return result

    async def wait_for_validation(self) -> Optional[ValidationResult]:
        """Run any debounced validation now and return the current result."""
        await self.debouncer.flush()
        return self.validation

    # ================================================================
    # Amounts
    # ================================================================

    @property
    def is_local_mode(self) -> bool:
        return self.currency != REFERENCE_CURRENCY

    @property
    def amounts(self) -> AmountPair:
        return AmountPair(
            local_amount=self.local_amount,
            local_currency=self.currency,
            settlement_amount=self.settlement_amount,
        )

    def set_currency(self, code: Optional[str]) -> bool:
        """
        Switch the local currency.

        Returns:
            False when the switch was refused (no snapshot, unsupported
            code, or no rate for it); the current mode is kept
        """
        currency = get_currency(code)

        if currency is not None and currency.is_reference:
            self.currency = REFERENCE_CURRENCY
            self.local_amount = None
            return True

        if (
            currency is None
            or self.snapshot is None
            or not self.snapshot.rate_for(currency.code)
        ):
            self.reporter.warning(
                f"Local currency {code or '<empty>'} unavailable",
                context="PaymentSession",
            )
            return False

        self.currency = currency.code
        self.local_amount = round_display(
            self._convert(self.settlement_amount, REFERENCE_CURRENCY, currency.code)
        )
        return True

    def set_local_amount(self, text: Union[str, float, None]) -> Optional[float]:
        """
        Edit the local amount; the settlement side follows.

        Returns:
            The recomputed settlement amount
        """
        if not self.is_local_mode:
            return self.set_settlement_amount(text)

        self.local_amount = parse_amount(text)
        self.settlement_amount = round_display(
            self._convert(self.local_amount, self.currency, REFERENCE_CURRENCY)
        )
        return self.settlement_amount

    def set_settlement_amount(self, text: Union[str, float, None]) -> Optional[float]:
        """
        Edit the settlement amount; the local side follows in local mode.

        Returns:
            The settlement amount as parsed
        """
        self.settlement_amount = parse_amount(text)
        if self.is_local_mode:
            self.local_amount = round_display(
                self._convert(self.settlement_amount, REFERENCE_CURRENCY, self.currency)
            )
        return self.settlement_amount

    def _convert(
        self, amount: Optional[float], source: str, target: str
    ) -> Optional[float]:
        return self.converter.convert(amount, source, target, self.snapshot)

    # ================================================================
    # Submission
    # ================================================================

    @property
    def can_submit(self) -> bool:
        return (
            isinstance(self.validation, Valid)
            and self.validation.account.name == self.account_input
            and self.settlement_amount is not None
            and self.settlement_amount > 0
        )

    async def submit(self) -> DeliveryOutcome:
        """
        Build the directive and hand it to a signer.

        Raises:
            InvalidRecipientError: If no recipient was validated
            ValidationError: If the recipient was rejected (format or not found)
            InvalidAmountError: If the settlement amount is not positive
        """
        if self.memo is None:
            self.memo = self.memo_provider.get_or_create()

        directive = self.build_directive.execute(
            self.validation, self.settlement_amount, self.memo
        )
        self.reporter.info(
            f"Submitting {directive.amount_with_unit} to {directive.to} "
            f"(memo {directive.memo})",
            context="PaymentSession",
        )

        self.last_outcome = await self.deliver_transfer.execute(directive)
        return self.last_outcome
