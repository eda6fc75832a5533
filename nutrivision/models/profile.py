from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

Gender = Literal["Женский", "Мужской"]

DEFAULT_GOAL_TEXT = "Снижение веса"


class Profile(BaseModel):
    """User profile holding the calorie goal and body parameters."""

    name: Optional[str] = None
    email: Optional[str] = None
    goal_text: str = DEFAULT_GOAL_TEXT
    custom_goal: str = ""
    daily_limit: int = Field(2000, ge=300, le=10000, description="Daily calorie goal")
    calorie_norm: Optional[int] = Field(None, ge=300, le=10000)
    gender: Gender = "Женский"
    age: Optional[int] = Field(None, ge=1, le=130)
    weight: Optional[float] = Field(None, ge=1, description="Body weight in kilograms")
    height: Optional[float] = Field(None, ge=0, le=300, description="Height in centimetres")
    subscribed: bool = True


class ProfileUpdate(BaseModel):
    """Fields the user may change on their profile."""

    name: Optional[str] = Field(None, max_length=200)
    goal_text: Optional[str] = Field(None, max_length=200)
    custom_goal: Optional[str] = Field(None, max_length=500)
    daily_limit: Optional[int] = Field(None, ge=300, le=10000)
    calorie_norm: Optional[int] = Field(None, ge=300, le=10000)
    gender: Optional[Gender] = None
    age: Optional[int] = Field(None, ge=1, le=130)
    weight: Optional[float] = Field(None, ge=1)
    height: Optional[float] = Field(None, ge=0, le=300)
    subscribed: Optional[bool] = None


class CalorieNormRequest(BaseModel):
    gender: Gender
    age: int = Field(..., ge=1, le=130)
    weight: float = Field(..., ge=1, description="Body weight in kilograms")
    height: float = Field(..., ge=0, le=300, description="Height in centimetres")


class CalorieNormResponse(BaseModel):
    calorie_norm: int = Field(..., description="Estimated daily calorie need (kcal)")
