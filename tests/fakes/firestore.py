"""In-memory Firestore double for repository and API tests."""

from __future__ import annotations

import itertools
import operator
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from fastapi import HTTPException

from nutrivision.services.firestore import decode_value
from nutrivision.services.interfaces import FirestoreAPI

DOCUMENTS_ROOT = "projects/test-project/databases/(default)/documents"

_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "EQUAL": operator.eq,
    "NOT_EQUAL": operator.ne,
    "LESS_THAN": operator.lt,
    "LESS_THAN_OR_EQUAL": operator.le,
    "GREATER_THAN": operator.gt,
    "GREATER_THAN_OR_EQUAL": operator.ge,
}


class FirestoreFake(FirestoreAPI):
    """Stores documents per collection and evaluates simple structured queries."""

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._ids = itertools.count(1)
        self.queries: List[Dict[str, Any]] = []
        self.patches: List[Tuple[str, str, Dict[str, Any], List[str], bool]] = []
        self.deleted: List[Tuple[str, str]] = []

    def with_documents(
        self, collection: str, documents: Iterable[Dict[str, Any]]
    ) -> "FirestoreFake":
        """Seed ``collection`` with documents built by ``tests.builders``."""

        store = self._collections.setdefault(collection, {})
        for document in documents:
            doc_id = document["name"].rsplit("/", 1)[-1]
            store[doc_id] = {
                "name": f"{DOCUMENTS_ROOT}/{collection}/{doc_id}",
                "fields": dict(document.get("fields", {})),
            }
        return self

    def documents(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.get(collection, {})

    async def create_document(
        self, collection: str, fields: Dict[str, Any]
    ) -> Dict[str, Any]:
        doc_id = f"doc-{next(self._ids)}"
        document = {"name": f"{DOCUMENTS_ROOT}/{collection}/{doc_id}", "fields": dict(fields)}
        self._collections.setdefault(collection, {})[doc_id] = document
        return document

    async def run_query(self, structured_query: Dict[str, Any]) -> List[Dict[str, Any]]:
        self.queries.append(structured_query)
        collection = structured_query["from"][0]["collectionId"]
        where = structured_query.get("where")
        matches = [
            document
            for document in self.documents(collection).values()
            if where is None or _matches(document, where)
        ]
        for order in reversed(structured_query.get("orderBy", [])):
            path = order["field"]["fieldPath"]
            matches.sort(
                key=lambda document: _sort_key(_field(document, path)),
                reverse=order.get("direction") == "DESCENDING",
            )
        return matches

    async def get_document(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        return self.documents(collection).get(document_id)

    async def patch_document(
        self,
        collection: str,
        document_id: str,
        fields: Dict[str, Any],
        *,
        update_mask: Sequence[str],
        must_exist: bool = False,
    ) -> Dict[str, Any]:
        self.patches.append((collection, document_id, fields, list(update_mask), must_exist))
        store = self._collections.setdefault(collection, {})
        document = store.get(document_id)
        if document is None:
            if must_exist:
                raise HTTPException(status_code=404, detail="No document to update")
            document = {
                "name": f"{DOCUMENTS_ROOT}/{collection}/{document_id}",
                "fields": {},
            }
            store[document_id] = document
        for path in update_mask:
            if path in fields:
                document["fields"][path] = fields[path]
            else:
                document["fields"].pop(path, None)
        return document

    async def delete_document(self, collection: str, document_id: str) -> None:
        self.deleted.append((collection, document_id))
        self.documents(collection).pop(document_id, None)


def _field(document: Dict[str, Any], path: str) -> Any:
    value = document.get("fields", {}).get(path)
    return None if value is None else decode_value(value)


def _sort_key(value: Any) -> Tuple[bool, Any]:
    return (value is not None, value)


def _matches(document: Dict[str, Any], where: Dict[str, Any]) -> bool:
    if "compositeFilter" in where:
        composite = where["compositeFilter"]
        results = (_matches(document, item) for item in composite["filters"])
        return all(results) if composite["op"] == "AND" else any(results)
    field_filter = where["fieldFilter"]
    actual = _field(document, field_filter["field"]["fieldPath"])
    expected = decode_value(field_filter["value"])
    if actual is None:
        return False
    try:
        return _OPERATORS[field_filter["op"]](actual, expected)
    except TypeError:
        return False
