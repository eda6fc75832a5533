from __future__ import annotations

import math
from datetime import date as date_type, datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationInfo, computed_field, field_validator

from ..domain.rounding import round_half_up
from .time import DayWindow, TimeContext

UNDETERMINED = "Не определено"
DEFAULT_ADVICE = "Добавляйте больше овощей в каждую трапезу."


def split_ingredients(value: Any) -> List[str]:
    """Normalize stored ingredients (comma separated string or list) to a list."""

    if value is None:
        return []
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = [str(item) for item in value if item is not None]
    else:
        return []
    return [part.strip() for part in parts if part.strip()]


def coerce_macro(value: Any) -> int:
    """Turn a stored macro value into a non-negative integer, 0 when unusable."""

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return max(0, round_half_up(value))


class NutritionRecord(BaseModel):
    """Structured nutrition estimate for a single meal."""

    description: str = Field(UNDETERMINED, description="Dish name")
    ingredients: List[str] = Field(default_factory=list)
    portion_size: str = Field(UNDETERMINED, description='Portion mass, e.g. "250 г"')
    calories: int = Field(0, ge=0, description="Energy in kcal")
    protein: int = Field(0, ge=0, description="Protein in grams")
    carbs: int = Field(0, ge=0, description="Carbohydrates in grams")
    fat: int = Field(0, ge=0, description="Fat in grams")
    advice: str = Field(DEFAULT_ADVICE, description="Nutrition tip for the meal")

    @field_validator("description", "advice", mode="before")
    @classmethod
    def _default_blank_text(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("portion_size", mode="before")
    @classmethod
    def _default_missing_portion(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return UNDETERMINED
        return value

    @field_validator("ingredients", mode="before")
    @classmethod
    def _normalize_ingredients(cls, value: Any) -> List[str]:
        return split_ingredients(value)

    @field_validator("calories", "protein", "carbs", "fat", mode="before")
    @classmethod
    def _coerce_macros(cls, value: Any) -> int:
        return coerce_macro(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ingredients_text(self) -> str:
        return ", ".join(self.ingredients)


class FoodEntryCreate(NutritionRecord):
    """Payload submitted when the user saves an analysed meal."""

    notes: Optional[str] = Field(None, max_length=2000)
    image: Optional[str] = Field(
        None, description="Data URL of the analysed photo, if it should be kept"
    )


class FoodEntry(NutritionRecord):
    """A nutrition record persisted for a user."""

    id: Optional[str] = Field(None, description="Store-assigned identifier")
    user_id: str
    timestamp: datetime
    notes: Optional[str] = None
    image: Optional[str] = None

    @field_validator("timestamp")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class NotesUpdate(BaseModel):
    notes: str = Field(..., max_length=2000)


class FoodAnalysisRequest(BaseModel):
    """Photo submitted for nutrition estimation."""

    image_base64: str = Field(..., description="Base64 encoded image bytes")
    content_type: str = Field("image/jpeg", description="MIME type of the image")


class FoodAnalysisResponse(BaseModel):
    record: NutritionRecord
    raw_text: str = Field(..., description="Unparsed response of the vision model")


class DaySummary(BaseModel):
    """Aggregated nutrition information for a single calendar day."""

    date: date_type
    entries: List[FoodEntry]
    total_calories: int
    total_protein: int
    total_carbs: int
    total_fat: int


class DailyProgress(BaseModel):
    """Today's intake measured against the user's calorie goal."""

    calories: int
    protein: int
    carbs: int
    fat: int
    daily_goal: int
    progress_percentage: float = Field(..., ge=0, le=100)


class NutritionStats(BaseModel):
    """Averages across every logged day plus a calories-per-day series."""

    days: int
    avg_calories: int
    avg_protein: int
    avg_carbs: int
    avg_fat: int
    calories_by_day: List[int]
    dates: List[str] = Field(..., description='Chart labels as "<day>.<month>"')


class TodayResponse(TimeContext):
    """Entries of the current reference day with totals and goal progress."""

    window: DayWindow
    summary: DaySummary
    progress: DailyProgress


class HistoryResponse(TimeContext):
    """Time contextualized response containing one or more daily summaries."""

    days: List[DaySummary]
