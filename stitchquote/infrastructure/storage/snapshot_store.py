"""Opportunistic persistence of customization sessions.

Saving is best-effort: a snapshot that is too large or does not fit the
store's quota is skipped with a warning and never interrupts the caller.
"""

import json
from typing import Optional

from pydantic import ValidationError

from stitchquote.domain.entities import CustomizationSession
from stitchquote.domain.interfaces import KeyValueStoreInterface
from stitchquote.utils import format_file_size, get_logger, log_exception
from stitchquote.utils.config import PersistenceConfig
from stitchquote.utils.exceptions import QuotaExceededError, SnapshotTooLargeError, StorageError

from .key_value_store import InMemoryKeyValueStore, JsonFileKeyValueStore
from .snapshot_models import SessionSnapshot

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "customizationData"
DEFAULT_MAX_SNAPSHOT_BYTES = 2 * 1024 * 1024


class SessionSnapshotStore:
    """
    Saves and restores one session under a single key of a shared store.

    Usage:
        >>> snapshots = SessionSnapshotStore(InMemoryKeyValueStore())
        >>> snapshots.save(session)
        True
        >>> restored = snapshots.load()
    """

    def __init__(
        self,
        store: KeyValueStoreInterface,
        key: str = DEFAULT_STORAGE_KEY,
        max_bytes: int = DEFAULT_MAX_SNAPSHOT_BYTES,
    ):
        """
        Initialize the snapshot store.

        Args:
            store: Backing key-value store
            key: Key the snapshot is stored under
            max_bytes: Largest serialized snapshot that will be written
        """
        self.store = store
        self.key = key
        self.max_bytes = max_bytes

    @classmethod
    def from_config(cls, config: PersistenceConfig) -> "SessionSnapshotStore":
        """Build a snapshot store over a file or in-memory store."""
        if config.storage_path:
            store: KeyValueStoreInterface = JsonFileKeyValueStore(config.storage_path, config.quota_bytes)
        else:
            store = InMemoryKeyValueStore(config.quota_bytes)
        return cls(store, key=config.storage_key, max_bytes=config.max_snapshot_bytes)

    # =========================================
    # Serialization
    # =========================================

    @staticmethod
    def serialize(session: CustomizationSession) -> str:
        """Serialize a session to JSON, leaving out uploaded file bytes."""
        snapshot = SessionSnapshot.from_session(session)
        return json.dumps(snapshot.model_dump(mode="json"), ensure_ascii=False)

    @staticmethod
    def deserialize(payload: str) -> CustomizationSession:
        """Rebuild a session from JSON.

        Designs come back with placeholder files that have no content.

        Raises:
            StorageError: If the payload is not a valid snapshot
        """
        try:
            snapshot = SessionSnapshot.model_validate_json(payload)
            return snapshot.to_session()
        except (ValidationError, ValueError) as e:
            raise StorageError(f"Invalid session snapshot: {e}") from e

    def check_size(self, payload: str) -> int:
        """Return the payload size in bytes.

        Raises:
            SnapshotTooLargeError: If the payload exceeds the byte budget
        """
        size = len(payload.encode("utf-8"))
        if size > self.max_bytes:
            raise SnapshotTooLargeError(size_bytes=size, max_bytes=self.max_bytes)
        return size

    # =========================================
    # Store operations
    # =========================================

    def save(self, session: CustomizationSession) -> bool:
        """Persist a session snapshot.

        Returns:
            True if the snapshot was written. False if it was skipped for
            size or did not fit the store; in the latter case this store's
            own previous snapshot is removed.
        """
        try:
            payload = self.serialize(session)
            size = self.check_size(payload)
        except SnapshotTooLargeError as e:
            logger.warning(
                f"Session snapshot too large to save "
                f"({format_file_size(e.context['size_bytes'])} > {format_file_size(self.max_bytes)})"
            )
            return False
        except (ValidationError, ValueError, UnicodeError) as e:
            log_exception(logger, "session snapshot serialization", e)
            return False

        try:
            self.store.set(self.key, payload)
        except QuotaExceededError:
            logger.warning(f"Storage quota exceeded, clearing saved snapshot {self.key!r}")
            self._evict()
            return False
        except StorageError as e:
            log_exception(logger, "session snapshot save", e)
            return False

        logger.debug(f"Saved session snapshot ({format_file_size(size)})")
        return True

    def load(self) -> Optional[CustomizationSession]:
        """Restore the saved session, if any.

        A corrupt snapshot is removed and treated as absent.
        """
        try:
            payload = self.store.get(self.key)
        except StorageError as e:
            logger.error(f"Failed to read session snapshot: {e}")
            return None

        if payload is None:
            return None

        try:
            session = self.deserialize(payload)
        except StorageError as e:
            logger.warning(f"Discarding corrupt session snapshot: {e}")
            self._evict()
            return None

        logger.info(f"Restored session snapshot with {len(session.designs)} designs")
        return session

    def clear(self) -> None:
        """Remove the saved snapshot."""
        self._evict()

    def _evict(self) -> None:
        try:
            self.store.remove(self.key)
        except StorageError as e:
            logger.error(f"Failed to remove session snapshot: {e}")
