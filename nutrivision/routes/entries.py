from __future__ import annotations

import asyncio
import json
import logging
from typing import AsyncIterator, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from ..application.nutrition import (
    CreateFoodEntryUseCase,
    DeleteEntryUseCase,
    GetNutritionHistoryUseCase,
    GetNutritionStatsUseCase,
    GetTodayEntriesUseCase,
    StreamTodayEntriesUseCase,
    UpdateEntryNotesUseCase,
)
from ..firestore.application.ports import EntryNotFoundError
from ..models.nutrition import (
    FoodEntry,
    FoodEntryCreate,
    HistoryResponse,
    NotesUpdate,
    NutritionStats,
    TodayResponse,
)
from ..models.responses import OperationStatus
from ..platform.wiring import (
    get_create_food_entry_use_case,
    get_delete_entry_use_case,
    get_nutrition_history_use_case,
    get_nutrition_stats_use_case,
    get_stream_today_entries_use_case,
    get_today_entries_use_case,
    get_update_entry_notes_use_case,
)
from ..security import AuthenticatedUser, get_current_user
from .utils import resolve_timezone, timezone_query

logger = logging.getLogger(__name__)

router: APIRouter = APIRouter()

KEEPALIVE_SECONDS = 15.0

ENTRY_NOT_FOUND = {"error": "Entry not found"}


def format_snapshot(entries: List[FoodEntry]) -> str:
    payload = [entry.model_dump(mode="json") for entry in entries]
    return f"event: snapshot\ndata: {json.dumps(payload, ensure_ascii=False)}\n\n"


@router.post("/food-entries", status_code=201, response_model=FoodEntry)
async def create_food_entry(
    payload: FoodEntryCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: CreateFoodEntryUseCase = Depends(get_create_food_entry_use_case),
) -> FoodEntry:
    return await use_case(user.uid, payload)


@router.get("/food-entries/today", response_model=TodayResponse)
async def get_today_entries(
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: GetTodayEntriesUseCase = Depends(get_today_entries_use_case),
) -> TodayResponse:
    return await use_case(user.uid)


@router.get("/food-entries/today/stream")
async def stream_today_entries(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: StreamTodayEntriesUseCase = Depends(get_stream_today_entries_use_case),
) -> StreamingResponse:
    """Server-sent events with a full snapshot of today after every change."""

    queue: "asyncio.Queue[List[FoodEntry]]" = asyncio.Queue()
    entries, subscription = await use_case(user.uid, queue.put_nowait)

    async def events() -> AsyncIterator[str]:
        try:
            yield format_snapshot(entries)
            while not await request.is_disconnected():
                try:
                    snapshot = await asyncio.wait_for(queue.get(), KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    yield ": keepalive\n\n"
                    continue
                yield format_snapshot(snapshot)
        finally:
            subscription.cancel()
            logger.debug("Closed today stream for %s", user.uid)

    return StreamingResponse(
        events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


@router.get("/food-entries/history", response_model=HistoryResponse)
async def get_nutrition_history(
    timezone: Optional[str] = timezone_query,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: GetNutritionHistoryUseCase = Depends(get_nutrition_history_use_case),
) -> HistoryResponse:
    return await use_case(user.uid, resolve_timezone(timezone))


@router.get("/food-entries/stats", response_model=NutritionStats)
async def get_nutrition_stats(
    timezone: Optional[str] = timezone_query,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: GetNutritionStatsUseCase = Depends(get_nutrition_stats_use_case),
) -> NutritionStats:
    return await use_case(user.uid, resolve_timezone(timezone))


@router.patch("/food-entries/{entry_id}/notes", response_model=FoodEntry)
async def update_entry_notes(
    entry_id: str,
    update: NotesUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: UpdateEntryNotesUseCase = Depends(get_update_entry_notes_use_case),
) -> FoodEntry:
    try:
        return await use_case(user.uid, entry_id, update.notes)
    except EntryNotFoundError as exc:
        raise HTTPException(status_code=404, detail=ENTRY_NOT_FOUND) from exc


@router.delete("/food-entries/{entry_id}", response_model=OperationStatus)
async def delete_entry(
    entry_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: DeleteEntryUseCase = Depends(get_delete_entry_use_case),
) -> OperationStatus:
    try:
        return await use_case(user.uid, entry_id)
    except EntryNotFoundError as exc:
        raise HTTPException(status_code=404, detail=ENTRY_NOT_FOUND) from exc
