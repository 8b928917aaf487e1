"""In-memory key-value store for ephemeral sessions and tests."""

from __future__ import annotations

from .interface import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed key-value store. Contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None
