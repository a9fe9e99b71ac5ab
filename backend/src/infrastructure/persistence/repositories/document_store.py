"""
Document Store Repository Implementation
SQLAlchemy-based IDocumentStore over a single JSON documents table
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from sqlalchemy import select, and_, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from loguru import logger

from application.repositories.interfaces import Conditions, IDocumentStore
from core.exceptions import (
    DuplicateResourceException,
    PreconditionFailedException,
    RepositoryException,
    ResourceNotFoundException,
    ValidationException,
)
from domain.value_objects import GeoPoint
from infrastructure.persistence.documents import first_mismatch, normalize_value, unique_key
from infrastructure.persistence.models.document import DocumentModel


def _json_path(field: str):
    """JSON element expression for a (possibly dotted) field name"""
    parts = field.split(".")
    if len(parts) == 1:
        return DocumentModel.data[parts[0]]
    return DocumentModel.data[tuple(parts)]


def _typed(element, value: Any):
    """Cast a JSON element to the SQL type matching a Python value"""
    if isinstance(value, bool):
        return element.as_boolean()
    if isinstance(value, int):
        return element.as_integer()
    if isinstance(value, float):
        return element.as_float()
    if isinstance(value, str):
        return element.as_string()
    raise ValidationException("value", f"unsupported query value type: {type(value).__name__}")


class SQLAlchemyDocumentStore(IDocumentStore):
    """
    SQLAlchemy implementation of the document store.

    Every call runs in its own session and transaction. Updates and
    increments read the row with SELECT ... FOR UPDATE and write it back in
    the same transaction. On PostgreSQL the row lock serialises them; on
    SQLite FOR UPDATE is ignored and the engine from core.database starts
    each transaction with BEGIN IMMEDIATE instead.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @staticmethod
    def _to_record(model: DocumentModel) -> Dict[str, Any]:
        record = dict(model.data or {})
        record["id"] = model.id
        record["createdAt"] = model.created_at
        record["updatedAt"] = model.updated_at
        return record

    @staticmethod
    def _prepare(data: Dict[str, Any]) -> Dict[str, Any]:
        document = {
            key: normalize_value(value)
            for key, value in data.items()
            if key not in ("id", "createdAt", "updatedAt")
        }
        return document

    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
        unique_on: Optional[Sequence[str]] = None
    ) -> str:
        document = self._prepare(data)
        now = datetime.now(timezone.utc)
        key = unique_key(document, unique_on) if unique_on else None
        model = DocumentModel(
            id=uuid4().hex,
            collection=collection,
            data=document,
            unique_key=key,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    session.add(model)
            return model.id

        except IntegrityError:
            if key is not None:
                raise DuplicateResourceException(collection, "+".join(unique_on), key)
            logger.error(f"Integrity error creating document in {collection}")
            raise RepositoryException(f"Failed to create document in {collection}")
        except SQLAlchemyError as e:
            logger.error(f"Failed to create document in {collection}: {str(e)}")
            raise RepositoryException(f"Failed to create document: {str(e)}")

    async def get_by_id(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(DocumentModel).where(
                        DocumentModel.id == document_id,
                        DocumentModel.collection == collection
                    )
                )
                model = result.scalar_one_or_none()
                return self._to_record(model) if model else None

        except SQLAlchemyError as e:
            logger.error(f"Failed to get {collection}/{document_id}: {str(e)}")
            raise RepositoryException(f"Failed to get document: {str(e)}")

    async def update(
        self,
        collection: str,
        document_id: str,
        fields: Dict[str, Any],
        expected: Optional[Conditions] = None
    ) -> Dict[str, Any]:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    result = await session.execute(
                        select(DocumentModel)
                        .where(
                            DocumentModel.id == document_id,
                            DocumentModel.collection == collection
                        )
                        .with_for_update()
                    )
                    model = result.scalar_one_or_none()
                    if not model:
                        raise ResourceNotFoundException(collection, document_id)

                    mismatch = first_mismatch(model.data or {}, expected or ())
                    if mismatch is not None:
                        raise PreconditionFailedException(collection, document_id, mismatch)

                    # Reassign so the JSON column is flagged dirty
                    model.data = {**(model.data or {}), **self._prepare(fields)}
                    model.updated_at = datetime.now(timezone.utc)
                    await session.flush()
                    return self._to_record(model)

        except SQLAlchemyError as e:
            logger.error(f"Failed to update {collection}/{document_id}: {str(e)}")
            raise RepositoryException(f"Failed to update document: {str(e)}")

    async def query_equality(
        self,
        collection: str,
        conditions: Conditions,
        limit: int = 10
    ) -> List[Dict[str, Any]]:
        clauses = [DocumentModel.collection == collection]
        for field, value in conditions:
            value = normalize_value(value)
            clauses.append(_typed(_json_path(field), value) == value)

        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(DocumentModel).where(and_(*clauses)).limit(limit)
                )
                return [self._to_record(model) for model in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Failed to query {collection}: {str(e)}")
            raise RepositoryException(f"Failed to query documents: {str(e)}")

    async def query_range(
        self,
        collection: str,
        field: str,
        low: Any,
        high: Any,
        limit: int = 10
    ) -> List[Dict[str, Any]]:
        if isinstance(low, GeoPoint) and isinstance(high, GeoPoint):
            # Lexicographic (latitude, longitude) comparison
            lat = _json_path(f"{field}.latitude").as_float()
            lng = _json_path(f"{field}.longitude").as_float()
            range_clause = and_(
                or_(lat > low.latitude, and_(lat == low.latitude, lng >= low.longitude)),
                or_(lat < high.latitude, and_(lat == high.latitude, lng <= high.longitude)),
            )
        else:
            low, high = normalize_value(low), normalize_value(high)
            range_clause = _typed(_json_path(field), low).between(low, high)

        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(DocumentModel)
                    .where(DocumentModel.collection == collection, range_clause)
                    .limit(limit)
                )
                return [self._to_record(model) for model in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Failed range query on {collection}.{field}: {str(e)}")
            raise RepositoryException(f"Failed to query documents: {str(e)}")

    async def atomic_increment(
        self,
        collection: str,
        document_id: str,
        field: str,
        delta: int = 1
    ) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    result = await session.execute(
                        select(DocumentModel)
                        .where(
                            DocumentModel.id == document_id,
                            DocumentModel.collection == collection
                        )
                        .with_for_update()
                    )
                    model = result.scalar_one_or_none()
                    if not model:
                        raise ResourceNotFoundException(collection, document_id)

                    current = (model.data or {}).get(field) or 0
                    if isinstance(current, bool) or not isinstance(current, (int, float)):
                        raise ValidationException(field, "is not numeric")

                    model.data = {**model.data, field: current + delta}
                    model.updated_at = datetime.now(timezone.utc)

        except SQLAlchemyError as e:
            logger.error(f"Failed to increment {collection}/{document_id}.{field}: {str(e)}")
            raise RepositoryException(f"Failed to increment field: {str(e)}")
