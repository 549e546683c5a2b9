"""
TransferDirective entity - fully specified transfer ready for signing.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from okpay.domain.exceptions import InvalidAmountError
from okpay.domain.value_objects.account_name import AccountName
from okpay.domain.value_objects.memo import Memo

AMOUNT_QUANTUM = Decimal("0.001")
DEFAULT_ASSET = "HBD"


def to_settlement_amount(amount: Union[str, int, float, Decimal]) -> Decimal:
    """
    Parse and quantize a settlement amount to 3 fractional digits.

    Raises:
        InvalidAmountError: If amount is not a positive finite number or
            rounds to zero
    """
    if isinstance(amount, bool):
        raise InvalidAmountError(amount)
    if isinstance(amount, float) and not math.isfinite(amount):
        raise InvalidAmountError(amount)

    try:
        value = Decimal(str(amount).strip())
        if not value.is_finite():
            raise InvalidAmountError(amount)
        quantized = value.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(amount)

    if quantized <= 0:
        raise InvalidAmountError(amount)
    return quantized


@dataclass(frozen=True)
class TransferDirective:
    """
    Transfer instruction handed to a signing channel.

    Business rules:
    - Destination is a registry-validated account
    - Amount is positive and carries exactly 3 fractional digits
    - The sending account is left for the signer to fill in
    """

    to: AccountName
    amount: Decimal
    memo: Memo
    asset: str = DEFAULT_ASSET

    def __post_init__(self):
        """Validate directive invariants."""
        if not self.to.is_well_formed():
            raise ValueError(f"Destination is not a valid account: {self.to}")
        if self.amount.as_tuple().exponent != AMOUNT_QUANTUM.as_tuple().exponent:
            raise ValueError("Amount must carry exactly 3 fractional digits")
        if self.amount <= 0:
            raise ValueError("Amount must be positive")
        if not self.asset:
            raise ValueError("Asset symbol is required")

    @property
    def amount_str(self) -> str:
        """Amount as the signer expects it, e.g. '10.000'."""
        return f"{self.amount:.3f}"

    @property
    def amount_with_unit(self) -> str:
        """Amount with asset symbol, e.g. '10.000 HBD'."""
        return f"{self.amount_str} {self.asset}"

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "to": self.to.value,
            "amount": self.amount_str,
            "asset": self.asset,
            "memo": self.memo.value,
        }
