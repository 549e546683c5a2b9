"""
Build transfer directive use case.
"""

from decimal import Decimal
from typing import Optional, Union

from okpay.domain.entities.transfer_directive import (
    DEFAULT_ASSET,
    TransferDirective,
    to_settlement_amount,
)
from okpay.domain.exceptions import InvalidRecipientError
from okpay.domain.results.validation_result import ValidationResult
from okpay.domain.value_objects.memo import Memo


class BuildTransferDirective:
    """
    Gate a submission and assemble the transfer.

    A directive exists only for a Valid recipient and a positive settlement
    amount. A rejected recipient raises the error matching its reason.
    """

    def __init__(self, asset: str = DEFAULT_ASSET):
        self.asset = asset

    def execute(
        self,
        validation: Optional[ValidationResult],
        settlement_amount: Union[str, int, float, Decimal],
        memo: Memo,
    ) -> TransferDirective:
        """
        Build a directive.

        Raises:
            InvalidRecipientError: If no recipient was validated
            InvalidAccountFormatError: If the recipient is malformed
            AccountNotFoundError: If the registry has no such account
            InvalidAmountError: If the amount is not a positive finite number
        """
        if validation is None:
            raise InvalidRecipientError()
        record = validation.require_valid()

        amount = to_settlement_amount(settlement_amount)

        return TransferDirective(
            to=record.name,
            amount=amount,
            memo=memo,
            asset=self.asset,
        )
