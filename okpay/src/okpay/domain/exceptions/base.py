"""
Base domain exceptions.
"""


class OkpayError(Exception):
    """Base exception for all OKpay errors."""

    def __init__(self, message: str, code: str = "OKPAY_ERROR"):
        """
        Initialize OKpay error.

        Args:
            message: Human-readable error message
            code: Stable machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(OkpayError):
    """Raised when user input cannot form a payment request."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)
