"""Clamp nutrition values to plausible ranges before they are shown or stored."""

from __future__ import annotations

from typing import Optional, TypeVar

from ...models.nutrition import UNDETERMINED, NutritionRecord

MAX_CALORIES = 10000
MAX_MACRO_GRAMS = 1000

RecordT = TypeVar("RecordT", bound=NutritionRecord)


def clamp(value: int, upper: int, lower: int = 0) -> int:
    return max(lower, min(upper, value))


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip()


def sanitize_record(
    record: RecordT,
    *,
    max_calories: int = MAX_CALORIES,
    max_macro_grams: int = MAX_MACRO_GRAMS,
) -> RecordT:
    """Return a copy of ``record`` with macros clamped and text trimmed.

    Out-of-range values are clamped silently. Works for any record subtype,
    so stored entries keep their identifiers and notes.
    """

    update = {
        "calories": clamp(record.calories, max_calories),
        "protein": clamp(record.protein, max_macro_grams),
        "carbs": clamp(record.carbs, max_macro_grams),
        "fat": clamp(record.fat, max_macro_grams),
        "description": record.description.strip() or UNDETERMINED,
    }
    notes = getattr(record, "notes", None)
    if notes is not None:
        update["notes"] = _clean_text(notes)
    return record.model_copy(update=update)
