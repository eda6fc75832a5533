from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ...models.profile import Profile
from ...services.firestore import decode_fields, encode_fields
from ...services.interfaces import FirestoreAPI
from ..application.ports import ProfileRepository

logger = logging.getLogger(__name__)

PROFILES_COLLECTION = "profiles"

FIELD_NAMES: Dict[str, str] = {
    "name": "name",
    "email": "email",
    "goal_text": "goalText",
    "custom_goal": "customGoal",
    "daily_limit": "dailyLimit",
    "calorie_norm": "calorieNorm",
    "gender": "gender",
    "age": "age",
    "weight": "weight",
    "height": "height",
    "subscribed": "subscribed",
}


def _profile_from_fields(data: Dict[str, Any]) -> Profile:
    """Build a profile from stored fields, dropping values that fail validation."""

    values = {
        attribute: data[stored]
        for attribute, stored in FIELD_NAMES.items()
        if data.get(stored) not in (None, "")
    }
    try:
        return Profile(**values)
    except ValidationError as exc:
        invalid = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
        logger.warning("Ignoring invalid stored profile fields: %s", sorted(invalid))
        return Profile(**{k: v for k, v in values.items() if k not in invalid})


class FirestoreProfileAdapter(ProfileRepository):
    """Concrete Firestore adapter storing one profile document per user."""

    def __init__(self, *, client: FirestoreAPI) -> None:
        self._client = client

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        document = await self._client.get_document(PROFILES_COLLECTION, user_id)
        if document is None:
            return None
        return _profile_from_fields(decode_fields(document.get("fields", {})))

    async def save_profile(
        self, user_id: str, changes: Dict[str, Any], *, email: Optional[str] = None
    ) -> Profile:
        existing = await self._client.get_document(PROFILES_COLLECTION, user_id)
        stored: Dict[str, Any] = (
            decode_fields(existing.get("fields", {})) if existing is not None else {}
        )

        values: Dict[str, Any] = {
            FIELD_NAMES[attribute]: value
            for attribute, value in changes.items()
            if attribute in FIELD_NAMES
        }
        values["updatedAt"] = datetime.now(timezone.utc)
        if existing is None:
            values["createdAt"] = values["updatedAt"]
            values["userId"] = user_id
            if email:
                values["email"] = email

        await self._client.patch_document(
            PROFILES_COLLECTION,
            user_id,
            encode_fields(values),
            update_mask=list(values),
        )
        stored.update(values)
        return _profile_from_fields(stored)


def create_firestore_profile_adapter(*, client: FirestoreAPI) -> ProfileRepository:
    return FirestoreProfileAdapter(client=client)
