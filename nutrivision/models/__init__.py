from .nutrition import (
    DailyProgress,
    DaySummary,
    FoodAnalysisRequest,
    FoodAnalysisResponse,
    FoodEntry,
    FoodEntryCreate,
    HistoryResponse,
    NotesUpdate,
    NutritionRecord,
    NutritionStats,
    TodayResponse,
)
from .profile import CalorieNormRequest, CalorieNormResponse, Profile, ProfileUpdate
from .responses import OperationStatus
from .time import DayWindow, TimeContext

__all__ = [
    'CalorieNormRequest',
    'CalorieNormResponse',
    'DailyProgress',
    'DaySummary',
    'DayWindow',
    'FoodAnalysisRequest',
    'FoodAnalysisResponse',
    'FoodEntry',
    'FoodEntryCreate',
    'HistoryResponse',
    'NotesUpdate',
    'NutritionRecord',
    'NutritionStats',
    'OperationStatus',
    'Profile',
    'ProfileUpdate',
    'TimeContext',
    'TodayResponse',
]
