"""
Local filesystem key-value store.

Each key is one file under the base directory, suitable for a single device.
"""

from __future__ import annotations

from pathlib import Path

import aiofiles
import aiofiles.os

from ..core.exceptions import StorageError
from .interface import KeyValueStore


class LocalKeyValueStore(KeyValueStore):
    """Filesystem-backed key-value store."""

    def __init__(self, base_path: Path) -> None:
        """Initialize local storage.

        Args:
            base_path: Base directory for all stored keys
        """
        self.base_path = base_path.expanduser().resolve()
        self._suffix = ".json"

    def _get_full_path(self, key: str) -> Path:
        """Get full filesystem path for a key.

        Normalizes the key to prevent path traversal and ensures the resulting
        path is within the base storage directory.

        Args:
            key: The storage key to convert to a filesystem path.

        Returns:
            The resolved absolute path within the base storage directory.
        """
        clean_key = key.lstrip("/\\").replace("..", "").replace(":", "")
        full_path = (self.base_path / (clean_key + self._suffix)).resolve()

        try:
            full_path.relative_to(self.base_path)
        except ValueError:
            clean_key = clean_key.replace("/", "_").replace("\\", "_")
            full_path = self.base_path / (clean_key + self._suffix)

        return full_path

    async def get(self, key: str) -> str | None:
        full_path = self._get_full_path(key)
        if not full_path.exists():
            return None

        try:
            async with aiofiles.open(full_path, "r", encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(
                message="Could not read stored value",
                key=key,
                operation="get",
                context={"path": str(full_path)},
                cause=e,
            ) from e

    async def set(self, key: str, value: str) -> None:
        full_path = self._get_full_path(key)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(full_path, "w", encoding="utf-8") as f:
                await f.write(value)
        except OSError as e:
            raise StorageError(
                message="Could not write value",
                key=key,
                operation="set",
                context={"path": str(full_path)},
                cause=e,
            ) from e

    async def delete(self, key: str) -> bool:
        full_path = self._get_full_path(key)
        if not full_path.exists():
            return False

        try:
            await aiofiles.os.remove(full_path)
        except OSError as e:
            raise StorageError(
                message="Could not delete value",
                key=key,
                operation="delete",
                cause=e,
            ) from e
        return True

    def get_local_path(self, key: str) -> Path:
        """Filesystem path a key is stored at (whether or not it exists yet)."""
        return self._get_full_path(key)
