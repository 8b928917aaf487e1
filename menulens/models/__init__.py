"""Data models for MenuLens."""

from .onboarding import GUIDED_FLOW, INTRO_FLOW, OnboardingStep, StepKind, get_flow
from .profile import (
    EMAIL_ERROR_MESSAGE,
    Allergen,
    DietaryRestriction,
    Goal,
    UserProfile,
    is_valid_email,
    lookup_filter,
)
from .scan import MenuItem, ScanResult, ScanState
from .session import ModalKind, ModalVisibility, Screen, ScreenKind, Session

__all__ = [
    "GUIDED_FLOW",
    "INTRO_FLOW",
    "OnboardingStep",
    "StepKind",
    "get_flow",
    "EMAIL_ERROR_MESSAGE",
    "Allergen",
    "DietaryRestriction",
    "Goal",
    "UserProfile",
    "is_valid_email",
    "lookup_filter",
    "MenuItem",
    "ScanResult",
    "ScanState",
    "ModalKind",
    "ModalVisibility",
    "Screen",
    "ScreenKind",
    "Session",
]
