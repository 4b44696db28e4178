"""Key-value stores and session snapshot persistence."""

from .key_value_store import InMemoryKeyValueStore, JsonFileKeyValueStore
from .snapshot_models import DesignSnapshot, OptionSnapshot, SelectionsSnapshot, SessionSnapshot
from .snapshot_store import DEFAULT_MAX_SNAPSHOT_BYTES, DEFAULT_STORAGE_KEY, SessionSnapshotStore

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "DesignSnapshot",
    "OptionSnapshot",
    "SelectionsSnapshot",
    "SessionSnapshot",
    "DEFAULT_MAX_SNAPSHOT_BYTES",
    "DEFAULT_STORAGE_KEY",
    "SessionSnapshotStore",
]
