"""Daily calorie need estimate (Mifflin-St Jeor)."""

from __future__ import annotations

from ..rounding import round_half_up

MIN_CALORIE_NORM = 300
MALE = "Мужской"


def calculate_calorie_norm(gender: str, weight: float, height: float, age: int) -> int:
    """Estimate basal calorie need in kcal, never below ``MIN_CALORIE_NORM``.

    Args:
        gender: ``"Мужской"`` adds the male constant; any other value uses the
            female formula.
        weight: Body weight in kilograms.
        height: Height in centimetres.
        age: Age in years.
    """

    norm = 10 * weight + 6.25 * height - 5 * age
    if gender == MALE:
        norm += 5
    return max(MIN_CALORIE_NORM, round_half_up(norm))
