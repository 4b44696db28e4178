"""
Abstract interface for durable key-value storage.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStoreInterface(ABC):
    """
    Abstract base class for string key-value stores.

    Keys share one quota, like browser local storage: a write under one key
    can fail because of data stored under another.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Storage key.

        Returns:
            The stored string, or None if the key is absent.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Args:
            key: Storage key.
            value: String to store.

        Raises:
            QuotaExceededError: If the write would exceed the store quota.
                The previous value under ``key`` is left untouched.
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is a no-op."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """Return all stored keys."""
        pass
