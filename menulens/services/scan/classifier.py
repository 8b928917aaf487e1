"""
Menu classifiers.

A Classifier turns the user's active filters into a ScanResult. The mock works
from a fixed sample menu; a recognition-backed classifier can replace it without
changing the scan simulator's timing or cancellation behavior.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ...models.profile import Allergen as A
from ...models.profile import DietaryRestriction as D
from ...models.scan import MenuItem, ScanResult

SAMPLE_MENU: tuple[MenuItem, ...] = (
    MenuItem(
        name="Grilled Chicken Salad (no dressing)",
        violates=frozenset({D.VEGETARIAN, D.VEGAN}),
    ),
    MenuItem(name="Steamed Vegetables"),
    MenuItem(name="Fresh Fruit Plate", violates=frozenset({D.KETO})),
    MenuItem(
        name="Herb-Crusted Salmon",
        allergens=frozenset({A.FISH}),
        violates=frozenset({D.VEGETARIAN, D.VEGAN}),
    ),
    MenuItem(
        name="Caesar Salad (contains dairy)",
        allergens=frozenset({A.DAIRY, A.MILK, A.EGGS, A.FISH, A.WHEAT, A.GLUTEN}),
        violates=frozenset({D.VEGETARIAN, D.VEGAN, D.DAIRY_FREE, D.GLUTEN_FREE}),
    ),
    MenuItem(
        name="Cream of Mushroom Soup",
        allergens=frozenset({A.DAIRY, A.MILK, A.WHEAT, A.GLUTEN}),
        violates=frozenset({D.VEGAN, D.DAIRY_FREE, D.GLUTEN_FREE}),
    ),
    MenuItem(
        name="Chocolate Mousse",
        allergens=frozenset({A.DAIRY, A.MILK, A.EGGS, A.TREE_NUTS}),
        violates=frozenset({D.VEGAN, D.DAIRY_FREE, D.KETO, D.PALEO}),
    ),
)


class Classifier(ABC):
    """Decides which menu items are safe for a set of filters."""

    @abstractmethod
    def classify(self, active_filters: frozenset[str]) -> ScanResult:
        """Classify a menu against the user's filters.

        Args:
            active_filters: Display values of every toggled restriction and allergen.

        Returns:
            The scan result. Must be deterministic for a given filter set.
        """
        ...


class MockMenuClassifier(Classifier):
    """Classifies a fixed menu.

    An item is risky when it carries an active allergen or breaks an active
    dietary restriction. Detected allergens are the active ones found anywhere
    on the menu. Item order follows the menu.
    """

    def __init__(self, menu: Sequence[MenuItem] = SAMPLE_MENU) -> None:
        self.menu = tuple(menu)

    def classify(self, active_filters: frozenset[str]) -> ScanResult:
        safe: list[str] = []
        risky: list[str] = []
        detected: set[str] = set()

        for item in self.menu:
            if item.conflicts_with(active_filters):
                risky.append(item.name)
            else:
                safe.append(item.name)
            detected.update(a.value for a in item.allergens if a.value in active_filters)

        return ScanResult(
            safe_items=tuple(safe),
            risky_items=tuple(risky),
            allergens_detected=frozenset(detected),
            active_filters=active_filters,
        )
