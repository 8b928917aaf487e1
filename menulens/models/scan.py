"""
Scan result models.

A ScanResult is produced once per completed scan and never mutated; the next
scan replaces it wholesale.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from .profile import Allergen, DietaryRestriction


class ScanState(str, Enum):
    """Lifecycle of the scan simulator."""

    IDLE = "idle"
    SCANNING = "scanning"
    COMPLETE = "complete"


class MenuItem(BaseModel):
    """A dish on a menu with the filters it conflicts with."""

    name: str
    allergens: frozenset[Allergen] = Field(default_factory=frozenset)
    violates: frozenset[DietaryRestriction] = Field(
        default_factory=frozenset, description="Diets this dish is not compatible with"
    )

    model_config = {"frozen": True}

    def conflicts_with(self, active_filters: frozenset[str]) -> bool:
        """Whether any active filter rules this dish out."""
        return any(a.value in active_filters for a in self.allergens) or any(
            d.value in active_filters for d in self.violates
        )


class ScanResult(BaseModel):
    """Outcome of one menu scan."""

    safe_items: tuple[str, ...] = Field(default=())
    risky_items: tuple[str, ...] = Field(default=())
    allergens_detected: frozenset[str] = Field(default_factory=frozenset)
    active_filters: frozenset[str] = Field(
        default_factory=frozenset, description="Filters the scan was run against"
    )
    scanned_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = {"frozen": True}

    @property
    def total_items(self) -> int:
        return len(self.safe_items) + len(self.risky_items)
