"""Core infrastructure components for MenuLens."""

from .config import Config, get_config
from .exceptions import (
    CameraError,
    CameraErrorReason,
    MenuLensError,
    StorageError,
    ValidationError,
)
from .logging import bind_context, clear_context, get_logger, setup_logging
from .types import ServiceResult

__all__ = [
    "Config",
    "get_config",
    "CameraError",
    "CameraErrorReason",
    "MenuLensError",
    "StorageError",
    "ValidationError",
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
    "ServiceResult",
]
