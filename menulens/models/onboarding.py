"""
Onboarding flow definitions.

A flow is an ordered tuple of steps. Steps are numbered from 1; the number of
steps bounds the Onboarding screen's step value.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class StepKind(str, Enum):
    """What a step collects."""

    GOAL = "goal"
    FILTERS = "filters"
    EMAIL = "email"
    INTRO = "intro"


class OnboardingStep(BaseModel):
    """One screen of the onboarding wizard."""

    kind: StepKind
    title: str
    description: str = ""
    action_label: str = Field(default="Next", description="Label of the forward action")

    model_config = {"frozen": True}


GUIDED_FLOW: tuple[OnboardingStep, ...] = (
    OnboardingStep(
        kind=StepKind.GOAL,
        title="What brings you to MenuLens?",
        description="Pick the goal that matters most when you eat out",
    ),
    OnboardingStep(
        kind=StepKind.FILTERS,
        title="Your dietary filters",
        description="Toggle the restrictions and allergens we should watch for",
    ),
    OnboardingStep(
        kind=StepKind.EMAIL,
        title="Stay in the loop",
        description="Enter your email to finish setting up",
        action_label="Get Started",
    ),
)

INTRO_FLOW: tuple[OnboardingStep, ...] = (
    OnboardingStep(
        kind=StepKind.INTRO,
        title="Welcome to MenuLens",
        description="Your personal dietary assistant for safer dining out",
    ),
    OnboardingStep(
        kind=StepKind.INTRO,
        title="Scan Any Menu",
        description="Use your camera to scan restaurant menus instantly",
    ),
    OnboardingStep(
        kind=StepKind.INTRO,
        title="Get Instant Results",
        description="Receive detailed analysis of allergens and dietary restrictions",
        action_label="Get Started",
    ),
)

FLOWS: dict[str, tuple[OnboardingStep, ...]] = {
    "guided": GUIDED_FLOW,
    "intro": INTRO_FLOW,
}


def get_flow(variant: str) -> tuple[OnboardingStep, ...]:
    """Look up a built-in flow by variant name.

    Raises:
        KeyError: If the variant is unknown.
    """
    return FLOWS[variant]
