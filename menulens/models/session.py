"""
Session state models.

The Session aggregate is the single owner of everything the user can see:
which screen is showing, which overlays are open, and the profile being edited.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from .profile import UserProfile


class ScreenKind(str, Enum):
    """Top-level screens."""

    ONBOARDING = "onboarding"
    CAMERA = "camera"


class Screen(BaseModel):
    """Current screen: Onboarding(step) or Camera."""

    kind: ScreenKind
    step: int | None = Field(default=None, description="1-based onboarding step")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_step(self) -> Screen:
        if self.kind == ScreenKind.ONBOARDING:
            if self.step is None or self.step < 1:
                raise ValueError("Onboarding screen requires a step >= 1")
        elif self.step is not None:
            raise ValueError("Camera screen has no step")
        return self

    @classmethod
    def onboarding(cls, step: int) -> Screen:
        return cls(kind=ScreenKind.ONBOARDING, step=step)

    @classmethod
    def camera(cls) -> Screen:
        return cls(kind=ScreenKind.CAMERA)

    @property
    def is_camera(self) -> bool:
        return self.kind == ScreenKind.CAMERA

    def __str__(self) -> str:
        if self.is_camera:
            return "Camera"
        return f"Onboarding({self.step})"


class ModalKind(str, Enum):
    """Overlays that can sit on top of any screen."""

    SETTINGS = "settings"
    TRAVEL_MODE = "travel_mode"


class ModalVisibility(BaseModel):
    """Independent visibility flags for each modal."""

    settings: bool = False
    travel_mode: bool = False

    def is_open(self, kind: ModalKind) -> bool:
        return getattr(self, kind.value)

    def set(self, kind: ModalKind, visible: bool) -> None:
        setattr(self, kind.value, visible)


class Session(BaseModel):
    """Aggregate state owned by the session controller."""

    session_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8])
    profile: UserProfile = Field(default_factory=UserProfile)
    screen: Screen = Field(default_factory=lambda: Screen.onboarding(1))
    modals: ModalVisibility = Field(default_factory=ModalVisibility)
    travel_mode_enabled: bool = Field(default=False)
    started_at: datetime = Field(default_factory=datetime.utcnow)
