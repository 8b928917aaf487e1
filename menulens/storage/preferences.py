"""
Preference store.

Persists the UserProfile as JSON under a single application-defined key. Loading
never fails: a missing, corrupt or unreadable value yields an empty profile.
"""

from __future__ import annotations

import pydantic

from ..core.config import PREFERENCES_KEY
from ..core.exceptions import StorageError
from ..core.logging import get_logger
from ..models.profile import UserProfile
from .interface import KeyValueStore

logger = get_logger(__name__)


class PreferenceStore:
    """Load and save the user's preferences."""

    def __init__(self, store: KeyValueStore, key: str = PREFERENCES_KEY) -> None:
        """Initialize the preference store.

        Args:
            store: Backend the serialized profile is written to.
            key: Namespace key the profile lives under.
        """
        self.store = store
        self.key = key

    async def save(self, profile: UserProfile) -> None:
        """Serialize and store the profile, replacing any previous value.

        Args:
            profile: Profile to persist.

        Raises:
            StorageError: If the backend is unavailable.
        """
        payload = profile.model_dump_json()
        await self.store.set(self.key, payload)
        logger.info(
            "Preferences saved",
            key=self.key,
            goal=profile.goal.value if profile.goal else None,
            filters=len(profile.active_filters),
        )

    async def load(self) -> UserProfile:
        """Load the saved profile.

        Returns:
            The stored profile, or an empty profile if nothing usable is stored.
        """
        try:
            raw = await self.store.get(self.key)
        except StorageError as e:
            logger.warning("Preferences unavailable, using defaults", key=self.key, error=str(e))
            return UserProfile()

        if raw is None:
            logger.debug("No saved preferences", key=self.key)
            return UserProfile()

        try:
            return UserProfile.model_validate_json(raw)
        except pydantic.ValidationError as e:
            logger.warning(
                "Discarding corrupt preferences",
                key=self.key,
                errors=e.error_count(),
            )
            return UserProfile()

    async def clear(self) -> bool:
        """Remove saved preferences.

        Returns:
            True if something was removed.
        """
        removed = await self.store.delete(self.key)
        logger.info("Preferences cleared", key=self.key, removed=removed)
        return removed
