"""
In-Memory Document Store
Dict-backed IDocumentStore for local runs and tests
"""
import asyncio
import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from loguru import logger

from application.repositories.interfaces import Conditions, IDocumentStore
from core.exceptions import (
    DuplicateResourceException,
    PreconditionFailedException,
    ResourceNotFoundException,
    ValidationException,
)
from domain.value_objects import GeoPoint
from infrastructure.persistence.documents import (
    first_mismatch,
    normalize_value,
    resolve_path,
    unique_key,
)

_MISSING = object()


class InMemoryDocumentStore(IDocumentStore):
    """
    Keeps every collection in process memory.

    Mutations run under one asyncio.Lock, so increments and unique inserts
    are atomic with respect to other coroutines on the same event loop.
    Documents are deep-copied on the way in and out.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._unique_index: Dict[Tuple[str, str], str] = {}
        self._lock = asyncio.Lock()

    def _documents(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    @staticmethod
    def _export(document_id: str, document: Dict[str, Any]) -> Dict[str, Any]:
        record = copy.deepcopy(document)
        record["id"] = document_id
        return record

    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
        unique_on: Optional[Sequence[str]] = None
    ) -> str:
        document = copy.deepcopy(data)
        document.pop("id", None)
        now = datetime.now(timezone.utc)
        document["createdAt"] = now
        document["updatedAt"] = now

        async with self._lock:
            document_id = uuid4().hex
            if unique_on:
                key = (collection, unique_key(document, unique_on))
                if key in self._unique_index:
                    raise DuplicateResourceException(collection, "+".join(unique_on), key[1])
                self._unique_index[key] = document_id
            self._documents(collection)[document_id] = document

        logger.debug(f"Created {collection}/{document_id}")
        return document_id

    async def get_by_id(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        document = self._documents(collection).get(document_id)
        if document is None:
            return None
        return self._export(document_id, document)

    async def update(
        self,
        collection: str,
        document_id: str,
        fields: Dict[str, Any],
        expected: Optional[Conditions] = None
    ) -> Dict[str, Any]:
        async with self._lock:
            document = self._documents(collection).get(document_id)
            if document is None:
                raise ResourceNotFoundException(collection, document_id)
            mismatch = first_mismatch(document, expected or ())
            if mismatch is not None:
                raise PreconditionFailedException(collection, document_id, mismatch)
            changes = copy.deepcopy(fields)
            changes.pop("id", None)
            changes.pop("createdAt", None)
            document.update(changes)
            document["updatedAt"] = datetime.now(timezone.utc)
            return self._export(document_id, document)

    async def query_equality(
        self,
        collection: str,
        conditions: Conditions,
        limit: int = 10
    ) -> List[Dict[str, Any]]:
        wanted = [(field, normalize_value(value)) for field, value in conditions]
        results = []
        for document_id, document in self._documents(collection).items():
            if len(results) >= limit:
                break
            if all(resolve_path(document, field, _MISSING) == value for field, value in wanted):
                results.append(self._export(document_id, document))
        return results

    async def query_range(
        self,
        collection: str,
        field: str,
        low: Any,
        high: Any,
        limit: int = 10
    ) -> List[Dict[str, Any]]:
        geo = isinstance(low, GeoPoint) or isinstance(high, GeoPoint)
        low, high = normalize_value(low), normalize_value(high)
        results = []
        for document_id, document in self._documents(collection).items():
            if len(results) >= limit:
                break
            value = resolve_path(document, field, None)
            if value is None:
                continue
            if geo:
                try:
                    value = GeoPoint.from_dict(value)
                except ValidationException:
                    continue
            try:
                in_range = low <= value <= high
            except TypeError:
                continue
            if in_range:
                results.append(self._export(document_id, document))
        return results

    async def atomic_increment(
        self,
        collection: str,
        document_id: str,
        field: str,
        delta: int = 1
    ) -> None:
        async with self._lock:
            document = self._documents(collection).get(document_id)
            if document is None:
                raise ResourceNotFoundException(collection, document_id)
            current = document.get(field) or 0
            if isinstance(current, bool) or not isinstance(current, (int, float)):
                raise ValidationException(field, "is not numeric")
            document[field] = current + delta
            document["updatedAt"] = datetime.now(timezone.utc)
