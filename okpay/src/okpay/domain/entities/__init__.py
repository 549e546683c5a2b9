"""
Domain entities.
"""

from okpay.domain.entities.transfer_directive import (
    AMOUNT_QUANTUM,
    TransferDirective,
    to_settlement_amount,
)

__all__ = ["TransferDirective", "to_settlement_amount", "AMOUNT_QUANTUM"]
