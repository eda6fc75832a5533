"""Protocol interfaces for external service clients."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

import httpx


@runtime_checkable
class FirestoreAPI(Protocol):
    """Minimal interface for Firestore document clients."""

    async def create_document(
        self, collection: str, fields: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Create a document with a generated id and return the stored document."""

    async def run_query(self, structured_query: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Run a structured query and return the matching documents in order."""

    async def get_document(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a document by id, ``None`` when it does not exist."""

    async def patch_document(
        self,
        collection: str,
        document_id: str,
        fields: Dict[str, Any],
        *,
        update_mask: Sequence[str],
        must_exist: bool = False,
    ) -> Dict[str, Any]:
        """Update the masked fields of a document and return it."""

    async def delete_document(self, collection: str, document_id: str) -> None:
        """Delete a document."""


@runtime_checkable
class VisionAPI(Protocol):
    """Client turning a meal photo into the model's free-text answer."""

    async def describe_food(self, image: bytes, content_type: str) -> str:
        """Return the raw labelled answer for ``image``."""


@runtime_checkable
class FirebaseAuthAPI(Protocol):
    """Client resolving Firebase ID tokens to accounts."""

    async def lookup(self, id_token: str) -> Dict[str, Any]:
        """Return the account record (``localId``, ``email``) for a token."""


@runtime_checkable
class HTTPClient(Protocol):
    """HTTP client interface used for vision and identity requests."""

    async def post(
        self,
        url: str,
        *,
        headers: Dict[str, str] | None = None,
        params: Dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:  # pragma: no cover - thin wrapper
        """Perform a POST request."""
