from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from ...models.nutrition import FoodEntry
from ...models.profile import Profile


class EntryNotFoundError(LookupError):
    """Raised when an entry does not exist or belongs to another user."""


@runtime_checkable
class EntryRepository(Protocol):
    """Port defining the user-scoped food entry operations."""

    async def create_entry(self, entry: FoodEntry) -> FoodEntry:
        """Persist an entry and return it with its store-assigned id."""

    async def list_entries_in_window(
        self, user_id: str, start: datetime, end: datetime
    ) -> List[FoodEntry]:
        """Return the user's entries with ``start <= timestamp <= end``, newest first."""

    async def list_entries(self, user_id: str) -> List[FoodEntry]:
        """Return every entry of the user, newest first."""

    async def get_entry(self, user_id: str, entry_id: str) -> Optional[FoodEntry]:
        """Return one entry owned by the user, ``None`` otherwise."""

    async def update_notes(self, user_id: str, entry_id: str, notes: str) -> FoodEntry:
        """Replace the notes of an entry and return the updated entry."""

    async def delete_entry(self, user_id: str, entry_id: str) -> None:
        """Delete an entry owned by the user."""


@runtime_checkable
class ProfileRepository(Protocol):
    """Port defining profile persistence."""

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        """Return the stored profile, ``None`` when the user has none yet."""

    async def save_profile(
        self, user_id: str, changes: Dict[str, Any], *, email: Optional[str] = None
    ) -> Profile:
        """Create or update the profile with ``changes`` and return the result."""
