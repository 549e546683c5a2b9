"""
Currency and exchange-rate exceptions.
"""

from okpay.domain.exceptions.base import OkpayError, ValidationError


class UnsupportedCurrencyError(ValidationError):
    """Raised when a currency code is not in the supported table."""

    def __init__(self, code: str):
        super().__init__(f"Unsupported currency: {code}", code="UNSUPPORTED_CURRENCY")
        self.currency = code


class RateFetchError(OkpayError):
    """Raised when the exchange-rate endpoint cannot be read."""

    def __init__(self, message: str, status_code: int = None):
        """
        Initialize rate fetch error.

        Args:
            message: Error message
            status_code: HTTP status code, when a response was received
        """
        super().__init__(message, code="RATE_FETCH_FAILED")
        self.status_code = status_code
