"""
Key-value store interface.

Defines the abstract durable storage surface the session persists to, enabling
pluggable backends (local filesystem, in-memory).
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract string key-value store."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Read the value stored under a key.

        Args:
            key: Storage key.

        Returns:
            The stored string, or None if the key is absent.

        Raises:
            StorageError: If the backend cannot be read.
        """
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a value, overwriting any previous one.

        Args:
            key: Storage key.
            value: String to store.

        Raises:
            StorageError: If the backend cannot be written.
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key.

        Args:
            key: Storage key.

        Returns:
            True if the key was deleted, False if it did not exist.
        """
        ...
