from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ...models.nutrition import FoodEntry
from ...services.firestore import (
    decode_fields,
    document_id,
    encode_fields,
    encode_value,
)
from ...services.interfaces import FirestoreAPI
from ..application.ports import EntryNotFoundError, EntryRepository

logger = logging.getLogger(__name__)

ENTRIES_COLLECTION = "foodEntries"


def _field_filter(path: str, op: str, value: Any) -> Dict[str, Any]:
    return {
        "fieldFilter": {
            "field": {"fieldPath": path},
            "op": op,
            "value": encode_value(value),
        }
    }


class FirestoreEntryAdapter(EntryRepository):
    """Concrete Firestore adapter handling food entry persistence and queries."""

    def __init__(self, *, client: FirestoreAPI) -> None:
        self._client = client

    async def create_entry(self, entry: FoodEntry) -> FoodEntry:
        now = datetime.now(timezone.utc)
        values: Dict[str, Any] = {
            "description": entry.description,
            "ingredients": list(entry.ingredients),
            "portionSize": entry.portion_size,
            "calories": entry.calories,
            "protein": entry.protein,
            "carbs": entry.carbs,
            "fat": entry.fat,
            "advice": entry.advice,
            "timestamp": entry.timestamp,
            "userId": entry.user_id,
            "createdAt": now,
            "updatedAt": now,
        }
        if entry.notes:
            values["notes"] = entry.notes
        if entry.image:
            values["image"] = entry.image
        document = await self._client.create_document(
            ENTRIES_COLLECTION, encode_fields(values)
        )
        return entry.model_copy(update={"id": document_id(document)})

    async def list_entries_in_window(
        self, user_id: str, start: datetime, end: datetime
    ) -> List[FoodEntry]:
        return await self._query_entries(
            [
                _field_filter("userId", "EQUAL", user_id),
                _field_filter("timestamp", "GREATER_THAN_OR_EQUAL", start),
                _field_filter("timestamp", "LESS_THAN_OR_EQUAL", end),
            ]
        )

    async def list_entries(self, user_id: str) -> List[FoodEntry]:
        return await self._query_entries([_field_filter("userId", "EQUAL", user_id)])

    async def get_entry(self, user_id: str, entry_id: str) -> Optional[FoodEntry]:
        document = await self._client.get_document(ENTRIES_COLLECTION, entry_id)
        if document is None:
            return None
        entry = self._parse_document(document)
        if entry is None or entry.user_id != user_id:
            return None
        return entry

    async def update_notes(self, user_id: str, entry_id: str, notes: str) -> FoodEntry:
        entry = await self.get_entry(user_id, entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        await self._client.patch_document(
            ENTRIES_COLLECTION,
            entry_id,
            encode_fields({"notes": notes, "updatedAt": datetime.now(timezone.utc)}),
            update_mask=["notes", "updatedAt"],
            must_exist=True,
        )
        return entry.model_copy(update={"notes": notes})

    async def delete_entry(self, user_id: str, entry_id: str) -> None:
        entry = await self.get_entry(user_id, entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        await self._client.delete_document(ENTRIES_COLLECTION, entry_id)

    async def _query_entries(self, filters: List[Dict[str, Any]]) -> List[FoodEntry]:
        where: Dict[str, Any]
        if len(filters) == 1:
            where = filters[0]
        else:
            where = {"compositeFilter": {"op": "AND", "filters": filters}}
        structured_query: Dict[str, Any] = {
            "from": [{"collectionId": ENTRIES_COLLECTION}],
            "where": where,
            "orderBy": [{"field": {"fieldPath": "timestamp"}, "direction": "DESCENDING"}],
        }
        entries: List[FoodEntry] = []
        for document in await self._client.run_query(structured_query):
            entry = self._parse_document(document)
            if entry is not None:
                entries.append(entry)
        return entries

    @staticmethod
    def _parse_document(document: Dict[str, Any]) -> Optional[FoodEntry]:
        try:
            data = decode_fields(document.get("fields", {}))
            notes = data.get("notes")
            if notes is None:
                # Older web clients saved edits under ``note``.
                notes = data.get("note")
            return FoodEntry(
                id=document_id(document),
                user_id=data["userId"],
                timestamp=data["timestamp"],
                description=data.get("description"),
                ingredients=data.get("ingredients"),
                portion_size=data.get("portionSize"),
                calories=data.get("calories"),
                protein=data.get("protein"),
                carbs=data.get("carbs"),
                fat=data.get("fat"),
                advice=data.get("advice"),
                notes=notes,
                image=data.get("image"),
            )
        except (KeyError, TypeError, ValueError, ValidationError):
            logger.warning("Skipping unreadable entry document %s", document.get("name"))
            return None


def create_firestore_entry_adapter(*, client: FirestoreAPI) -> EntryRepository:
    """Create a Firestore entry adapter without relying on FastAPI wiring."""
    return FirestoreEntryAdapter(client=client)
