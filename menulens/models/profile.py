"""
User profile and preference catalogs.

The catalogs are closed enumerations: a filter name is valid only if it is a
member of exactly one of them. The profile itself carries no behavior beyond
validation and a stable serialized form.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_serializer, field_validator

EMAIL_ERROR_MESSAGE = "Please enter a valid email address"


class Goal(str, Enum):
    """Why the user is scanning menus."""

    SEVERE_ALLERGY_SAFETY = "Severe Allergy Safety"
    LIFESTYLE_DIET = "Lifestyle Diet"
    FITNESS_MACROS = "Fitness/Macros"


class DietaryRestriction(str, Enum):
    """Dietary restriction catalog."""

    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    GLUTEN_FREE = "gluten-free"
    DAIRY_FREE = "dairy-free"
    KETO = "keto"
    PALEO = "paleo"
    HALAL = "halal"
    KOSHER = "kosher"
    LOW_SODIUM = "low-sodium"


class Allergen(str, Enum):
    """Allergen catalog."""

    PEANUTS = "Peanuts"
    TREE_NUTS = "Tree Nuts"
    MILK = "Milk"
    DAIRY = "Dairy"
    EGGS = "Eggs"
    WHEAT = "Wheat"
    GLUTEN = "Gluten"
    SOY = "Soy"
    FISH = "Fish"
    SHELLFISH = "Shellfish"
    SESAME = "Sesame"


FilterName = DietaryRestriction | Allergen


def lookup_filter(name: str) -> FilterName | None:
    """Resolve a filter name against both catalogs.

    Args:
        name: Display value of a dietary restriction or allergen.

    Returns:
        The matching catalog member, or None if neither catalog has it.
    """
    for catalog in (DietaryRestriction, Allergen):
        try:
            return catalog(name)
        except ValueError:
            continue
    return None


def is_valid_email(value: str) -> bool:
    """Minimal email rule: the address must contain an '@'."""
    return "@" in value


class UserProfile(BaseModel):
    """Preferences collected during onboarding and edited in settings."""

    goal: Goal | None = Field(default=None, description="Selected goal")
    dietary_restrictions: set[DietaryRestriction] = Field(default_factory=set)
    allergens: set[Allergen] = Field(default_factory=set)
    email: str | None = Field(default=None, description="Accepted email address")

    model_config = {"validate_assignment": True}

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str | None) -> str | None:
        if value is not None and not is_valid_email(value):
            raise ValueError(EMAIL_ERROR_MESSAGE)
        return value

    @field_serializer("dietary_restrictions", "allergens")
    def _serialize_sorted(self, values: set[FilterName]) -> list[str]:
        # Sorted so that save(load()) is byte-stable.
        return sorted(member.value for member in values)

    @property
    def active_filters(self) -> frozenset[str]:
        """All toggled filters, both catalogs, as display values.

        Returns:
            frozenset[str]: Union of dietary restriction and allergen values.
        """
        return frozenset(
            [d.value for d in self.dietary_restrictions] + [a.value for a in self.allergens]
        )

    @property
    def is_empty(self) -> bool:
        """Whether nothing has been collected yet."""
        return (
            self.goal is None
            and not self.dietary_restrictions
            and not self.allergens
            and self.email is None
        )
