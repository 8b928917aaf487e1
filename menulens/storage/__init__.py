"""Storage abstraction for MenuLens."""

from __future__ import annotations

from ..core.config import StorageConfig
from .interface import KeyValueStore
from .local import LocalKeyValueStore
from .memory import InMemoryKeyValueStore
from .preferences import PreferenceStore


def create_store(config: StorageConfig) -> KeyValueStore:
    """Build the key-value backend named by the configuration."""
    if config.backend == "memory":
        return InMemoryKeyValueStore()
    return LocalKeyValueStore(config.base_path)


__all__ = [
    "KeyValueStore",
    "LocalKeyValueStore",
    "InMemoryKeyValueStore",
    "PreferenceStore",
    "create_store",
]
