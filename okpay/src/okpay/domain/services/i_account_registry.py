"""
Account registry interface.

Batch lookup of Hive accounts by name.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence


class IAccountRegistry(ABC):
    """Abstract interface for the remote account registry."""

    @abstractmethod
    async def get_accounts(self, names: Sequence[str]) -> List[Dict[str, Any]]:
        """
        Look up accounts by name.

        Args:
            names: Sanitized account names

        Returns:
            Account records for the names that exist (possibly empty).
            Transport and server failures also yield an empty list.
        """
