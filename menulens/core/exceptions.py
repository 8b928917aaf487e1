"""
Custom exception hierarchy for MenuLens.

All exceptions inherit from MenuLensError to enable consistent error handling
across the session. None of them is fatal: callers degrade the affected screen
and keep the session navigable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass
class MenuLensError(Exception):
    """Base exception for all MenuLens errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ValidationError(MenuLensError):
    """Raised when user input fails validation."""

    field_name: str | None = None
    actual_value: Any = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_name:
            return f"Validation failed for '{self.field_name}': {base}"
        return f"Validation failed: {base}"


class CameraErrorReason(str, Enum):
    """Why a capture device could not be opened."""

    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


@dataclass
class CameraError(MenuLensError):
    """Raised when the capture device refuses or fails to deliver a stream."""

    reason: CameraErrorReason = CameraErrorReason.UNKNOWN

    def __str__(self) -> str:
        base = super().__str__()
        return f"[camera:{self.reason.value}] {base}"


@dataclass
class StorageError(MenuLensError):
    """Raised when the key-value store cannot be read or written."""

    key: str = ""
    operation: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"[storage.{self.operation}] key '{self.key}': {base}"
