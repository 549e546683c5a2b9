"""JSON-file backed key-value store (persistent scope)."""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from okpay.domain.exceptions import StorageError
from okpay.domain.services.i_key_value_store import IKeyValueStore


class JsonFileKeyValueStore(IKeyValueStore):
    """
    Key-value store persisted as one JSON object on disk.

    Every write rewrites the file through a temporary file and
    os.replace, so a crash never leaves a half-written document behind.
    Reads go to disk each time; other processes sharing the file see
    each other's writes.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize store.

        Args:
            path: JSON file location (parent directories are created on
                first write)
        """
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}")
        if not isinstance(data, dict):
            raise StorageError(f"Unexpected content in {self.path}")
        return data

    def _dump(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".okpay-", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}")

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Non-string value stored under {key}", key=key)
        return value

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def delete(self, key: str) -> bool:
        data = self._load()
        if key not in data:
            return False
        del data[key]
        self._dump(data)
        return True
