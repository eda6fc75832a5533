"""Application layer use cases coordinating domain services."""

from .nutrition import (
    AnalyzeFoodImageUseCase,
    CreateFoodEntryUseCase,
    DeleteEntryUseCase,
    GetNutritionHistoryUseCase,
    GetNutritionStatsUseCase,
    GetTodayEntriesUseCase,
    StreamTodayEntriesUseCase,
    UpdateEntryNotesUseCase,
)
from .profile import CalculateCalorieNormUseCase, GetProfileUseCase, UpdateProfileUseCase

__all__ = [
    "AnalyzeFoodImageUseCase",
    "CalculateCalorieNormUseCase",
    "CreateFoodEntryUseCase",
    "DeleteEntryUseCase",
    "GetNutritionHistoryUseCase",
    "GetNutritionStatsUseCase",
    "GetProfileUseCase",
    "GetTodayEntriesUseCase",
    "StreamTodayEntriesUseCase",
    "UpdateEntryNotesUseCase",
    "UpdateProfileUseCase",
]
