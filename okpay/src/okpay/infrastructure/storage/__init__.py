"""Key-value storage backends."""

from okpay.infrastructure.storage.json_file_store import JsonFileKeyValueStore
from okpay.infrastructure.storage.memory_store import InMemoryKeyValueStore

__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore"]
