"""Onboarding service."""

from .service import GOAL_REQUIRED_MESSAGE, OnboardingController

__all__ = ["GOAL_REQUIRED_MESSAGE", "OnboardingController"]
