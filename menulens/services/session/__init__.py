"""Session controller service."""

from .service import SessionController

__all__ = ["SessionController"]
