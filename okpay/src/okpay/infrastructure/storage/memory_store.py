"""In-memory key-value store (session scope)."""

from typing import Dict, Optional

from okpay.domain.services.i_key_value_store import IKeyValueStore


class InMemoryKeyValueStore(IKeyValueStore):
    """
    Process-local store.

    Lives as long as the session that owns it; used for the session memo
    and as the rate cache backend in tests.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self):
        """Stored keys, for inspection."""
        return list(self._data)
