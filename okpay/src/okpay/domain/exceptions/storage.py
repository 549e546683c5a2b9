"""
Storage exceptions.
"""

from okpay.domain.exceptions.base import OkpayError


class StorageError(OkpayError):
    """Raised by key-value stores on read/write failure."""

    def __init__(self, message: str, key: str = None):
        super().__init__(message, code="STORAGE_ERROR")
        self.key = key
