"""Group nutrition entries by calendar day and derive multi-day statistics."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence

from ...models.nutrition import DaySummary, FoodEntry, NutritionStats
from ..rounding import round_half_up
from .summary import build_daily_summary


def local_date(entry: FoodEntry, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of ``entry`` in ``tz`` (the process timezone when ``None``)."""

    return entry.timestamp.astimezone(tz).date()


def group_by_day(
    records: Iterable[FoodEntry], tz: Optional[tzinfo] = None
) -> List[DaySummary]:
    """Aggregate entries into per-day summaries, most recent day first.

    The grouping key is the entry date in ``tz``, not the reference timezone
    used to fetch "today". Input order does not affect the totals.
    """

    grouped: Dict[date, List[FoodEntry]] = defaultdict(list)
    for entry in records:
        grouped[local_date(entry, tz)].append(entry)
    return [
        build_daily_summary(day, items)
        for day, items in sorted(grouped.items(), reverse=True)
    ]


def compute_nutrition_stats(summaries: Sequence[DaySummary]) -> NutritionStats:
    """Average daily intake over the distinct days present in ``summaries``.

    With no days every average is 0 and the chart series are empty.
    """

    days = len(summaries)
    if days == 0:
        return NutritionStats(
            days=0,
            avg_calories=0,
            avg_protein=0,
            avg_carbs=0,
            avg_fat=0,
            calories_by_day=[],
            dates=[],
        )

    chronological = sorted(summaries, key=lambda s: s.date)
    return NutritionStats(
        days=days,
        avg_calories=round_half_up(sum(s.total_calories for s in summaries) / days),
        avg_protein=round_half_up(sum(s.total_protein for s in summaries) / days),
        avg_carbs=round_half_up(sum(s.total_carbs for s in summaries) / days),
        avg_fat=round_half_up(sum(s.total_fat for s in summaries) / days),
        calories_by_day=[s.total_calories for s in chronological],
        dates=[f"{s.date.day}.{s.date.month}" for s in chronological],
    )
