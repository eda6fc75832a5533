from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Callable, List, Optional, Sequence, Tuple, Union

from ..domain.nutrition.day_window import REFERENCE_TIMEZONE, day_window
from ..domain.nutrition.parser import parse_ai_message
from ..domain.nutrition.sanitize import sanitize_record
from ..domain.nutrition.summaries import compute_nutrition_stats, group_by_day
from ..domain.nutrition.summary import build_daily_progress, build_daily_summary
from ..firestore.application.ports import EntryRepository, ProfileRepository
from ..models.nutrition import (
    FoodAnalysisResponse,
    FoodEntry,
    FoodEntryCreate,
    HistoryResponse,
    NutritionRecord,
    NutritionStats,
    TodayResponse,
)
from ..models.responses import OperationStatus
from ..models.time import get_local_time
from ..services.feed import EntryFeed, SnapshotCallback, Subscription
from ..services.interfaces import VisionAPI

Clock = Callable[[], datetime]
Parser = Callable[[str], NutritionRecord]
TimeProvider = Callable[[Optional[Union[str, tzinfo]]], Tuple[datetime, str]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def sanitize_entries(entries: Sequence[FoodEntry]) -> List[FoodEntry]:
    return [sanitize_record(entry) for entry in entries]


async def publish_today(
    repository: EntryRepository,
    feed: EntryFeed,
    user_id: str,
    *,
    reference_tz: tzinfo,
    now: datetime,
) -> None:
    """Push the full snapshot of the user's current day to live subscribers."""

    if feed.subscriber_count(user_id) == 0:
        return
    window = day_window(now, reference_tz)
    entries = await repository.list_entries_in_window(user_id, window.start, window.end)
    feed.publish(user_id, sanitize_entries(entries))


@dataclass
class AnalyzeFoodImageUseCase:
    """Ask the vision model about a photo and parse its answer."""

    vision: VisionAPI
    parser: Parser = parse_ai_message

    async def __call__(self, image: bytes, content_type: str) -> FoodAnalysisResponse:
        raw_text = await self.vision.describe_food(image, content_type)
        record = sanitize_record(self.parser(raw_text))
        return FoodAnalysisResponse(record=record, raw_text=raw_text)


@dataclass
class CreateFoodEntryUseCase:
    """Persist an analysed meal for the user, stamped with the current time."""

    repository: EntryRepository
    feed: EntryFeed
    reference_tz: tzinfo = REFERENCE_TIMEZONE
    clock: Clock = utc_now

    async def __call__(self, user_id: str, payload: FoodEntryCreate) -> FoodEntry:
        now = self.clock()
        entry = FoodEntry(
            **sanitize_record(payload).model_dump(exclude={"ingredients_text"}),
            user_id=user_id,
            timestamp=now,
        )
        created = await self.repository.create_entry(entry)
        await publish_today(
            self.repository, self.feed, user_id, reference_tz=self.reference_tz, now=now
        )
        return created


@dataclass
class GetTodayEntriesUseCase:
    """Return today's entries (reference timezone) with totals and goal progress."""

    repository: EntryRepository
    profiles: ProfileRepository
    default_daily_goal: int = 2000
    reference_tz: tzinfo = REFERENCE_TIMEZONE
    clock: Clock = utc_now
    time_provider: TimeProvider = get_local_time

    async def __call__(self, user_id: str) -> TodayResponse:
        window = day_window(self.clock(), self.reference_tz)
        entries = sanitize_entries(
            await self.repository.list_entries_in_window(user_id, window.start, window.end)
        )
        profile = await self.profiles.get_profile(user_id)
        daily_goal = profile.daily_limit if profile is not None else self.default_daily_goal

        local_time, part = self.time_provider(self.reference_tz)
        return TodayResponse(
            window=window,
            summary=build_daily_summary(window.start.date(), entries),
            progress=build_daily_progress(entries, daily_goal),
            local_time=local_time,
            part_of_day=part,
        )


@dataclass
class GetNutritionHistoryUseCase:
    """Return every entry of the user grouped by calendar day, newest first."""

    repository: EntryRepository
    time_provider: TimeProvider = get_local_time

    async def __call__(self, user_id: str, tz: Optional[tzinfo] = None) -> HistoryResponse:
        entries = sanitize_entries(await self.repository.list_entries(user_id))
        local_time, part = self.time_provider(tz)
        return HistoryResponse(
            days=group_by_day(entries, tz), local_time=local_time, part_of_day=part
        )


@dataclass
class GetNutritionStatsUseCase:
    """Average daily intake across all logged days."""

    repository: EntryRepository

    async def __call__(self, user_id: str, tz: Optional[tzinfo] = None) -> NutritionStats:
        entries = sanitize_entries(await self.repository.list_entries(user_id))
        return compute_nutrition_stats(group_by_day(entries, tz))


@dataclass
class UpdateEntryNotesUseCase:
    """Replace the free-text notes of one entry."""

    repository: EntryRepository
    feed: EntryFeed
    reference_tz: tzinfo = REFERENCE_TIMEZONE
    clock: Clock = utc_now

    async def __call__(self, user_id: str, entry_id: str, notes: str) -> FoodEntry:
        entry = await self.repository.update_notes(user_id, entry_id, notes.strip())
        await publish_today(
            self.repository,
            self.feed,
            user_id,
            reference_tz=self.reference_tz,
            now=self.clock(),
        )
        return entry


@dataclass
class DeleteEntryUseCase:
    """Remove one entry of the user."""

    repository: EntryRepository
    feed: EntryFeed
    reference_tz: tzinfo = REFERENCE_TIMEZONE
    clock: Clock = utc_now

    async def __call__(self, user_id: str, entry_id: str) -> OperationStatus:
        await self.repository.delete_entry(user_id, entry_id)
        await publish_today(
            self.repository,
            self.feed,
            user_id,
            reference_tz=self.reference_tz,
            now=self.clock(),
        )
        return OperationStatus(status="deleted", id=entry_id)


@dataclass
class StreamTodayEntriesUseCase:
    """Subscribe to today's snapshots and return the current one."""

    repository: EntryRepository
    feed: EntryFeed
    reference_tz: tzinfo = REFERENCE_TIMEZONE
    clock: Clock = utc_now

    async def __call__(
        self, user_id: str, callback: SnapshotCallback
    ) -> Tuple[List[FoodEntry], Subscription]:
        # Subscribe before reading so a write in between is not lost.
        subscription = self.feed.subscribe(user_id, callback)
        window = day_window(self.clock(), self.reference_tz)
        try:
            entries = await self.repository.list_entries_in_window(
                user_id, window.start, window.end
            )
        except Exception:
            subscription.cancel()
            raise
        return sanitize_entries(entries), subscription


__all__ = [
    "AnalyzeFoodImageUseCase",
    "CreateFoodEntryUseCase",
    "DeleteEntryUseCase",
    "GetNutritionHistoryUseCase",
    "GetNutritionStatsUseCase",
    "GetTodayEntriesUseCase",
    "StreamTodayEntriesUseCase",
    "UpdateEntryNotesUseCase",
    "publish_today",
]
