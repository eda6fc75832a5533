"""FastAPI dependency wiring for application use cases."""

from __future__ import annotations

from datetime import tzinfo

from fastapi import Depends

from ..application.nutrition import (
    AnalyzeFoodImageUseCase,
    CreateFoodEntryUseCase,
    DeleteEntryUseCase,
    GetNutritionHistoryUseCase,
    GetNutritionStatsUseCase,
    GetTodayEntriesUseCase,
    StreamTodayEntriesUseCase,
    UpdateEntryNotesUseCase,
)
from ..application.profile import (
    CalculateCalorieNormUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from ..domain.nutrition.day_window import reference_timezone
from ..firestore.application.ports import EntryRepository, ProfileRepository
from ..firestore.infrastructure.entry_repository import create_firestore_entry_adapter
from ..firestore.infrastructure.profile_repository import create_firestore_profile_adapter
from ..services.feed import EntryFeed, get_entry_feed
from ..services.firestore import get_firestore_client
from ..services.interfaces import FirestoreAPI, VisionAPI
from ..services.vision import get_vision_client
from ..settings import Settings, get_settings


def provide_entry_port(
    client: FirestoreAPI = Depends(get_firestore_client),
) -> EntryRepository:
    return create_firestore_entry_adapter(client=client)


def provide_profile_port(
    client: FirestoreAPI = Depends(get_firestore_client),
) -> ProfileRepository:
    return create_firestore_profile_adapter(client=client)


def provide_reference_timezone(settings: Settings = Depends(get_settings)) -> tzinfo:
    return reference_timezone(settings.reference_utc_offset_hours)


def get_analyze_food_image_use_case(
    vision: VisionAPI = Depends(get_vision_client),
) -> AnalyzeFoodImageUseCase:
    return AnalyzeFoodImageUseCase(vision)


def get_create_food_entry_use_case(
    repository: EntryRepository = Depends(provide_entry_port),
    feed: EntryFeed = Depends(get_entry_feed),
    reference_tz: tzinfo = Depends(provide_reference_timezone),
) -> CreateFoodEntryUseCase:
    return CreateFoodEntryUseCase(repository, feed, reference_tz)


def get_today_entries_use_case(
    repository: EntryRepository = Depends(provide_entry_port),
    profiles: ProfileRepository = Depends(provide_profile_port),
    reference_tz: tzinfo = Depends(provide_reference_timezone),
    settings: Settings = Depends(get_settings),
) -> GetTodayEntriesUseCase:
    return GetTodayEntriesUseCase(
        repository,
        profiles,
        default_daily_goal=settings.default_daily_goal,
        reference_tz=reference_tz,
    )


def get_stream_today_entries_use_case(
    repository: EntryRepository = Depends(provide_entry_port),
    feed: EntryFeed = Depends(get_entry_feed),
    reference_tz: tzinfo = Depends(provide_reference_timezone),
) -> StreamTodayEntriesUseCase:
    return StreamTodayEntriesUseCase(repository, feed, reference_tz)


def get_nutrition_history_use_case(
    repository: EntryRepository = Depends(provide_entry_port),
) -> GetNutritionHistoryUseCase:
    return GetNutritionHistoryUseCase(repository)


def get_nutrition_stats_use_case(
    repository: EntryRepository = Depends(provide_entry_port),
) -> GetNutritionStatsUseCase:
    return GetNutritionStatsUseCase(repository)


def get_update_entry_notes_use_case(
    repository: EntryRepository = Depends(provide_entry_port),
    feed: EntryFeed = Depends(get_entry_feed),
    reference_tz: tzinfo = Depends(provide_reference_timezone),
) -> UpdateEntryNotesUseCase:
    return UpdateEntryNotesUseCase(repository, feed, reference_tz)


def get_delete_entry_use_case(
    repository: EntryRepository = Depends(provide_entry_port),
    feed: EntryFeed = Depends(get_entry_feed),
    reference_tz: tzinfo = Depends(provide_reference_timezone),
) -> DeleteEntryUseCase:
    return DeleteEntryUseCase(repository, feed, reference_tz)


def get_profile_use_case(
    profiles: ProfileRepository = Depends(provide_profile_port),
    settings: Settings = Depends(get_settings),
) -> GetProfileUseCase:
    return GetProfileUseCase(profiles, default_daily_goal=settings.default_daily_goal)


def get_update_profile_use_case(
    profiles: ProfileRepository = Depends(provide_profile_port),
) -> UpdateProfileUseCase:
    return UpdateProfileUseCase(profiles)


def get_calorie_norm_use_case() -> CalculateCalorieNormUseCase:
    return CalculateCalorieNormUseCase()


__all__ = [
    "provide_entry_port",
    "provide_profile_port",
    "provide_reference_timezone",
    "get_analyze_food_image_use_case",
    "get_create_food_entry_use_case",
    "get_today_entries_use_case",
    "get_stream_today_entries_use_case",
    "get_nutrition_history_use_case",
    "get_nutrition_stats_use_case",
    "get_update_entry_notes_use_case",
    "get_delete_entry_use_case",
    "get_profile_use_case",
    "get_update_profile_use_case",
    "get_calorie_norm_use_case",
]
