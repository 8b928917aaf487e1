"""
Onboarding Service.

Forward-only stepper over the configured onboarding steps. Steps are numbered
from 1 to N; moving forward from step N completes the wizard rather than
producing step N + 1.
"""

from __future__ import annotations

from collections.abc import Sequence

from ...core.exceptions import ValidationError
from ...core.logging import get_logger
from ...core.types import ServiceResult
from ...models.onboarding import GUIDED_FLOW, OnboardingStep, StepKind
from ...models.profile import (
    EMAIL_ERROR_MESSAGE,
    Allergen,
    DietaryRestriction,
    Goal,
    UserProfile,
    is_valid_email,
    lookup_filter,
)
from ...models.session import Screen

logger = get_logger(__name__)

GOAL_REQUIRED_MESSAGE = "Please choose a goal to continue"


class OnboardingController:
    """Drive the onboarding wizard and collect the profile."""

    def __init__(
        self,
        profile: UserProfile,
        steps: Sequence[OnboardingStep] = GUIDED_FLOW,
        step: int = 1,
    ) -> None:
        """Initialize the controller.

        Args:
            profile: Profile mutated as the user answers each step.
            steps: Ordered onboarding steps.
            step: 1-based step to start from.

        Raises:
            ValueError: If there are no steps or the start step is out of range.
        """
        if not steps:
            raise ValueError("Onboarding needs at least one step")
        if not 1 <= step <= len(steps):
            raise ValueError(f"Step {step} outside 1..{len(steps)}")

        self.profile = profile
        self.steps = tuple(steps)
        self._step = step
        self._completed = False

    @property
    def step(self) -> int:
        return self._step

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def current(self) -> OnboardingStep:
        return self.steps[self._step - 1]

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def screen(self) -> Screen:
        """Screen the wizard is currently on."""
        if self._completed:
            return Screen.camera()
        return Screen.onboarding(self._step)

    def select_goal(self, goal: Goal | str) -> ServiceResult[Screen]:
        """Record the user's goal, moving past the goal step.

        Args:
            goal: A Goal member or its display value.

        Returns:
            ServiceResult with the resulting screen.

        Raises:
            ValidationError: If the goal is not in the catalog.
        """
        try:
            chosen = Goal(goal)
        except ValueError as e:
            raise ValidationError(
                message="Unknown goal",
                field_name="goal",
                actual_value=goal,
                context={"choices": [g.value for g in Goal]},
            ) from e

        self.profile.goal = chosen
        logger.info("Goal selected", goal=chosen.value)

        if not self._completed and self.current.kind == StepKind.GOAL:
            return self._forward()
        return ServiceResult.ok(self.screen)

    def toggle_filter(self, name: str) -> bool:
        """Flip a dietary restriction or allergen.

        Names outside both catalogs are ignored; the UI only offers members.

        Args:
            name: Display value of the filter.

        Returns:
            True if the filter is now active, False otherwise.
        """
        member = lookup_filter(name)
        if member is None:
            logger.warning("Ignoring unknown filter", name=name)
            return False

        target: set[Allergen] | set[DietaryRestriction] = (
            self.profile.allergens
            if isinstance(member, Allergen)
            else self.profile.dietary_restrictions
        )
        if member in target:
            target.discard(member)
            active = False
        else:
            target.add(member)
            active = True

        logger.debug("Filter toggled", name=member.value, active=active)
        return active

    def submit_email(self, value: str) -> ServiceResult[Screen]:
        """Accept the user's email and finish the wizard.

        Args:
            value: Email address as typed.

        Returns:
            Success with the Camera screen, or a failure whose error is the
            fixed validation message. The step is unchanged on failure.
        """
        if self._completed:
            return ServiceResult.ok(self.screen)

        if not is_valid_email(value):
            logger.info("Email rejected", step=self._step)
            return ServiceResult.fail(EMAIL_ERROR_MESSAGE, field="email")

        self.profile.email = value
        return self._complete()

    def advance(self) -> ServiceResult[Screen]:
        """The generic forward ("Next" / "Get Started") action."""
        if self._completed:
            return ServiceResult.ok(self.screen)

        kind = self.current.kind
        if kind == StepKind.GOAL and self.profile.goal is None:
            return ServiceResult.fail(GOAL_REQUIRED_MESSAGE, field="goal")
        if kind == StepKind.EMAIL:
            return self.submit_email(self.profile.email or "")
        return self._forward()

    def _forward(self) -> ServiceResult[Screen]:
        if self._step >= len(self.steps):
            return self._complete()

        self._step += 1
        logger.info("Onboarding advanced", step=self._step, total=len(self.steps))
        return ServiceResult.ok(self.screen)

    def _complete(self) -> ServiceResult[Screen]:
        self._completed = True
        logger.info("Onboarding complete", steps=len(self.steps))
        return ServiceResult.ok(self.screen)
