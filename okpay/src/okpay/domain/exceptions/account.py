"""
Account-related exceptions.
"""

from okpay.domain.exceptions.base import OkpayError, ValidationError


class InvalidAccountFormatError(ValidationError):
    """Raised when an account name fails the Hive name pattern."""

    def __init__(self, account: str):
        """
        Initialize invalid account format error.

        Args:
            account: Sanitized candidate that failed the pattern
        """
        super().__init__(
            f"Invalid account name: {account!r}", code="INVALID_ACCOUNT_FORMAT"
        )
        self.account = account


class AccountNotFoundError(ValidationError):
    """Raised when the registry has no record for an account."""

    def __init__(self, account: str):
        super().__init__(f"Account not found: {account}", code="ACCOUNT_NOT_FOUND")
        self.account = account


class RegistryUnavailableError(OkpayError):
    """Raised inside the registry client when the RPC call fails."""

    def __init__(self, message: str, status_code: int = None):
        """
        Initialize registry unavailable error.

        Args:
            message: Error message
            status_code: HTTP status code, when the node answered at all
        """
        super().__init__(message, code="REGISTRY_UNAVAILABLE")
        self.status_code = status_code
