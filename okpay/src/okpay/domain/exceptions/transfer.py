"""
Transfer-related exceptions.
"""

from okpay.domain.exceptions.base import OkpayError, ValidationError


class InvalidRecipientError(ValidationError):
    """Raised when a directive is requested without a valid recipient."""

    def __init__(self, reason: str = "Recipient account is not valid"):
        super().__init__(reason, code="INVALID_RECIPIENT")


class InvalidAmountError(ValidationError):
    """Raised when the settlement amount is not a positive finite number."""

    def __init__(self, amount):
        """
        Initialize invalid amount error.

        Args:
            amount: Offending amount as received
        """
        super().__init__(f"Invalid amount: {amount!r}", code="INVALID_AMOUNT")
        self.amount = amount


class TransferRejectedError(OkpayError):
    """Raised when a signing extension reports a failed transfer."""

    def __init__(self, message: str):
        super().__init__(f"Payment failed: {message}", code="TRANSFER_REJECTED")
        self.reason = message
