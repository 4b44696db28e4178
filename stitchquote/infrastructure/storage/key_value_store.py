"""
Key-value store implementations.

Both stores count their quota over every stored key and value, so a write
can fail because of data other features keep in the same store.
"""

import json
from pathlib import Path
from typing import Optional

from stitchquote.domain.interfaces import KeyValueStoreInterface
from stitchquote.utils import get_logger
from stitchquote.utils.exceptions import QuotaExceededError, StorageError

logger = get_logger(__name__)


def _entry_size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


def _check_quota(data: dict[str, str], key: str, value: str, quota_bytes: Optional[int]) -> None:
    if quota_bytes is None:
        return
    used = sum(_entry_size(k, v) for k, v in data.items() if k != key)
    if used + _entry_size(key, value) > quota_bytes:
        raise QuotaExceededError(key=key, quota_bytes=quota_bytes)


class InMemoryKeyValueStore(KeyValueStoreInterface):
    """Process-local store with an optional shared quota."""

    def __init__(self, quota_bytes: Optional[int] = None):
        """
        Args:
            quota_bytes: Maximum total size of keys and values; None for unlimited
        """
        self.quota_bytes = quota_bytes
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        _check_quota(self._data, key, value, self.quota_bytes)
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def used_bytes(self) -> int:
        return sum(_entry_size(k, v) for k, v in self._data.items())


class JsonFileKeyValueStore(KeyValueStoreInterface):
    """
    Store persisted as a single JSON object on disk.

    The file is re-read on every access so several store instances over the
    same path see each other's writes.
    """

    def __init__(self, path: Path | str, quota_bytes: Optional[int] = None):
        """
        Args:
            path: JSON file holding all keys
            quota_bytes: Maximum total size of keys and values; None for unlimited
        """
        self.path = Path(path)
        self.quota_bytes = quota_bytes

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read store file: {e}", context={"path": str(self.path)}) from e
        if not isinstance(data, dict):
            raise StorageError("Store file does not hold a JSON object", context={"path": str(self.path)})
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Cannot write store file: {e}", context={"path": str(self.path)}) from e

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        _check_quota(data, key, value, self.quota_bytes)
        data[key] = value
        self._write(data)
        logger.debug(f"Stored {key!r} in {self.path}")

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def keys(self) -> list[str]:
        return list(self._read())

    def used_bytes(self) -> int:
        return sum(_entry_size(k, v) for k, v in self._read().items())
