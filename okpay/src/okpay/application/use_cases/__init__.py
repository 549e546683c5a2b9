"""Application use cases."""

from okpay.application.use_cases.build_payment_link import BuildPaymentLink
from okpay.application.use_cases.build_transfer_directive import (
    BuildTransferDirective,
)
from okpay.application.use_cases.deliver_transfer import (
    DeliverTransfer,
    DeliveryPolicy,
)
from okpay.application.use_cases.validate_account import ValidateAccount

__all__ = [
    "BuildPaymentLink",
    "BuildTransferDirective",
    "DeliverTransfer",
    "DeliveryPolicy",
    "ValidateAccount",
]
