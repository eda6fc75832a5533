"""Profile domain utilities."""

from .norm import MIN_CALORIE_NORM, calculate_calorie_norm

__all__ = ["MIN_CALORIE_NORM", "calculate_calorie_norm"]
