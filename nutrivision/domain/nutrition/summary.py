"""Daily nutrition summary builders."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from ...models.nutrition import DailyProgress, DaySummary, FoodEntry


def build_daily_summary(day: date, items: Sequence[FoodEntry]) -> DaySummary:
    """Aggregate a list of entries into a daily nutrition summary.

    Entries are ordered most recent first.
    """

    entries = sorted(items, key=lambda e: e.timestamp, reverse=True)
    return DaySummary(
        date=day,
        entries=entries,
        total_calories=sum(e.calories for e in entries),
        total_protein=sum(e.protein for e in entries),
        total_carbs=sum(e.carbs for e in entries),
        total_fat=sum(e.fat for e in entries),
    )


def build_daily_progress(items: Sequence[FoodEntry], daily_goal: int) -> DailyProgress:
    """Sum today's entries and express calories as a share of the goal (capped at 100)."""

    calories = sum(e.calories for e in items)
    percentage = 0.0
    if daily_goal > 0:
        percentage = min(calories / daily_goal * 100, 100.0)
    return DailyProgress(
        calories=calories,
        protein=sum(e.protein for e in items),
        carbs=sum(e.carbs for e in items),
        fat=sum(e.fat for e in items),
        daily_goal=daily_goal,
        progress_percentage=percentage,
    )
