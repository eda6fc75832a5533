"""Builder helpers to express test inputs succinctly."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from nutrivision.models.nutrition import FoodEntry
from nutrivision.services.firestore import encode_fields

from tests.fakes import DOCUMENTS_ROOT


def make_food_entry(**overrides: Any) -> FoodEntry:
    """Construct a stored entry with plausible defaults."""

    values: Dict[str, Any] = {
        "id": "entry-1",
        "user_id": "user-1",
        "timestamp": datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc),
        "description": "Овсянка",
        "ingredients": ["овсяные хлопья", "молоко"],
        "portion_size": "250 г",
        "calories": 300,
        "protein": 10,
        "carbs": 50,
        "fat": 6,
    }
    values.update(overrides)
    return FoodEntry(**values)


def make_entry_document(
    *, id: str = "entry-1", fields: Dict[str, Any] | None = None, **overrides: Any
) -> Dict[str, Any]:
    """Build a Firestore ``foodEntries`` document.

    ``overrides`` replace decoded field values by their stored (camelCase)
    name; ``fields`` replaces already encoded values verbatim.
    """

    values: Dict[str, Any] = {
        "description": "Овсянка",
        "ingredients": ["овсяные хлопья", "молоко"],
        "portionSize": "250 г",
        "calories": 300,
        "protein": 10,
        "carbs": 50,
        "fat": 6,
        "advice": "Добавьте ягоды.",
        "userId": "user-1",
        "timestamp": datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc),
    }
    values.update(overrides)
    encoded = encode_fields(values)
    if fields:
        encoded.update(fields)
    return {"name": f"{DOCUMENTS_ROOT}/foodEntries/{id}", "fields": encoded}


def make_profile_document(user_id: str = "user-1", **values: Any) -> Dict[str, Any]:
    """Build a Firestore ``profiles`` document from stored field values."""

    stored: Dict[str, Any] = {"userId": user_id, "email": "anna@example.com"}
    stored.update(values)
    return {"name": f"{DOCUMENTS_ROOT}/profiles/{user_id}", "fields": encode_fields(stored)}
