"""Nutrition domain utilities."""

from .day_window import day_window, end_of_day, reference_timezone, start_of_day
from .parser import parse_ai_message
from .sanitize import MAX_CALORIES, MAX_MACRO_GRAMS, clamp, sanitize_record
from .summaries import compute_nutrition_stats, group_by_day
from .summary import build_daily_progress, build_daily_summary

__all__ = [
    "MAX_CALORIES",
    "MAX_MACRO_GRAMS",
    "build_daily_progress",
    "build_daily_summary",
    "clamp",
    "compute_nutrition_stats",
    "day_window",
    "end_of_day",
    "group_by_day",
    "parse_ai_message",
    "reference_timezone",
    "sanitize_record",
    "start_of_day",
]
