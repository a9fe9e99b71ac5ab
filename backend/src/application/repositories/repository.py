"""
Generic Repository
Typed access to one document collection, configured per entity by composition
"""
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from loguru import logger

from core.exceptions import ResourceNotFoundException
from .interfaces import Conditions, IDocumentStore

T = TypeVar("T")


class Repository(Generic[T]):
    """
    Maps entities of one type to documents of one collection.

    Per-entity behaviour lives in the ``to_document``/``from_document``
    functions handed in at construction time.
    """

    def __init__(
        self,
        store: IDocumentStore,
        collection: str,
        to_document: Callable[[T], Dict[str, Any]],
        from_document: Callable[[Dict[str, Any]], T],
        resource_type: Optional[str] = None
    ):
        self.store = store
        self.collection = collection
        self.to_document = to_document
        self.from_document = from_document
        self.resource_type = resource_type or collection

    async def create(self, entity: T, unique_on: Optional[Sequence[str]] = None) -> T:
        """Persist a new entity and return it as stored"""
        document_id = await self.store.create(
            self.collection, self.to_document(entity), unique_on=unique_on
        )
        return await self.get(document_id)

    async def find(self, entity_id: str) -> Optional[T]:
        """Get entity by ID, None when missing"""
        document = await self.store.get_by_id(self.collection, entity_id)
        if document is None:
            return None
        return self.from_document(document)

    async def get(self, entity_id: str) -> T:
        """Get entity by ID or raise ResourceNotFoundException"""
        entity = await self.find(entity_id)
        if entity is None:
            raise ResourceNotFoundException(self.resource_type, entity_id)
        return entity

    async def update(
        self,
        entity_id: str,
        fields: Dict[str, Any],
        expected: Optional[Conditions] = None
    ) -> T:
        """Merge document fields and return the updated entity; ``expected`` guards the write"""
        document = await self.store.update(self.collection, entity_id, fields, expected)
        return self.from_document(document)

    async def query(self, conditions: Conditions, limit: int = 10) -> List[T]:
        documents = await self.store.query_equality(self.collection, conditions, limit)
        logger.debug(f"{self.collection}: {len(documents)} documents for {list(conditions)}")
        return [self.from_document(doc) for doc in documents]

    async def query_range(self, field: str, low: Any, high: Any, limit: int = 10) -> List[T]:
        documents = await self.store.query_range(self.collection, field, low, high, limit)
        return [self.from_document(doc) for doc in documents]

    async def increment(self, entity_id: str, field: str, delta: int = 1) -> None:
        await self.store.atomic_increment(self.collection, entity_id, field, delta)
