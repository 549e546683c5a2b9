"""
Key-value store interface.

String store backing the rate cache (persistent) and the session memo
(session-scoped).
"""

from abc import ABC, abstractmethod
from typing import Optional


class IKeyValueStore(ABC):
    """Abstract synchronous string key-value store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Retrieve value by key.

        Returns:
            Stored string, or None if absent

        Raises:
            StorageError: If the backing storage cannot be read
        """

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store value under key.

        Raises:
            StorageError: If the backing storage cannot be written
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete key.

        Returns:
            True if the key existed
        """
