from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import httpx
from fastapi import Depends, HTTPException

from ..security import AuthenticatedUser, get_current_user
from ..settings import Settings, get_settings
from .interfaces import FirestoreAPI

logger = logging.getLogger(__name__)

_FRACTION = re.compile(r"\.(\d+)")


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp; Firestore may send nanosecond precision."""

    text = value.strip().replace("Z", "+00:00")
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def encode_value(value: Any) -> Dict[str, Any]:
    """Convert a Python value into a Firestore ``Value`` payload."""

    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": _format_timestamp(value)}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(item) for item in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    return {"stringValue": str(value)}


def encode_fields(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: encode_value(value) for key, value in values.items()}


def decode_value(value: Dict[str, Any]) -> Any:
    """Convert a Firestore ``Value`` payload back into a Python value."""

    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "timestampValue" in value:
        return parse_timestamp(value["timestampValue"])
    if "stringValue" in value:
        return value["stringValue"]
    if "arrayValue" in value:
        return [decode_value(item) for item in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    # referenceValue, geoPointValue and bytesValue are passed through untouched.
    return next(iter(value.values()), None)


def decode_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {key: decode_value(value) for key, value in fields.items()}


def document_id(document: Dict[str, Any]) -> str:
    return str(document.get("name", "")).rsplit("/", 1)[-1]


class FirestoreClient(FirestoreAPI):
    """Minimal Firestore REST client acting on behalf of a signed-in user.

    Requests carry the user's Firebase ID token, so the project's security
    rules apply exactly as they do for the web client.
    """

    def __init__(self, *, settings: Settings, id_token: str) -> None:
        self._documents_path: str = (
            "https://firestore.googleapis.com/v1/projects/"
            f"{settings.firebase_project_id}/databases/(default)/documents"
        )
        self._headers: Dict[str, str] = {
            "Authorization": f"Bearer {id_token}",
            "Content-Type": "application/json",
        }
        self._timeout: float = 30.0

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                return await client.request(method, url, headers=self._headers, **kwargs)
        except httpx.TimeoutException as exc:
            logger.exception("Firestore %s %s timed out", method, url)
            raise HTTPException(status_code=504, detail="Request to Firestore timed out") from exc

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        resp = await self._send(method, url, **kwargs)
        if resp.status_code != 200:
            logger.warning("Firestore %s %s failed with %s", method, url, resp.status_code)
            raise HTTPException(status_code=resp.status_code, detail=resp.text)
        return resp

    def _document_url(self, collection: str, document_id: str) -> str:
        return f"{self._documents_path}/{collection}/{document_id}"

    async def create_document(
        self, collection: str, fields: Dict[str, Any]
    ) -> Dict[str, Any]:
        resp = await self._request(
            "POST", f"{self._documents_path}/{collection}", json={"fields": fields}
        )
        return resp.json()

    async def run_query(self, structured_query: Dict[str, Any]) -> List[Dict[str, Any]]:
        resp = await self._request(
            "POST",
            f"{self._documents_path}:runQuery",
            json={"structuredQuery": structured_query},
        )
        # An empty result set still yields one item carrying only ``readTime``.
        return [item["document"] for item in resp.json() if "document" in item]

    async def get_document(
        self, collection: str, document_id: str
    ) -> Optional[Dict[str, Any]]:
        url = self._document_url(collection, document_id)
        resp = await self._send("GET", url)
        if resp.status_code == 404:
            return None
        if resp.status_code != 200:
            logger.warning("Firestore GET %s failed with %s", url, resp.status_code)
            raise HTTPException(status_code=resp.status_code, detail=resp.text)
        return resp.json()

    async def patch_document(
        self,
        collection: str,
        document_id: str,
        fields: Dict[str, Any],
        *,
        update_mask: Sequence[str],
        must_exist: bool = False,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"updateMask.fieldPaths": list(update_mask)}
        if must_exist:
            params["currentDocument.exists"] = "true"
        resp = await self._request(
            "PATCH",
            self._document_url(collection, document_id),
            params=params,
            json={"fields": fields},
        )
        return resp.json()

    async def delete_document(self, collection: str, document_id: str) -> None:
        await self._request("DELETE", self._document_url(collection, document_id))


def get_firestore_client(
    settings: Settings = Depends(get_settings),
    user: AuthenticatedUser = Depends(get_current_user),
) -> FirestoreAPI:
    """Dependency that provides a Firestore client bound to the caller."""

    return FirestoreClient(settings=settings, id_token=user.id_token)
