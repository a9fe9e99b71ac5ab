"""
Repository Interfaces (Abstract Base Classes)
Define contracts for data access without implementation details
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple


# (field, value) pairs combined with logical AND
Conditions = Sequence[Tuple[str, Any]]


class IDocumentStore(ABC):
    """
    Schema-flexible document collections.

    Records are plain dicts carrying their identifier under ``id``. Failures
    other than the typed domain errors surface as ``RepositoryException`` and
    are never retried here; retry policy belongs to the store client.
    """

    @abstractmethod
    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
        unique_on: Optional[Sequence[str]] = None
    ) -> str:
        """
        Insert a document and return its generated id

        Stamps ``createdAt`` and ``updatedAt``. When ``unique_on`` names
        fields, the combination of their values must be unique within the
        collection; a conflicting insert raises DuplicateResourceException.
        """
        pass

    @abstractmethod
    async def get_by_id(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        """Get document by ID, None when missing"""
        pass

    @abstractmethod
    async def update(
        self,
        collection: str,
        document_id: str,
        fields: Dict[str, Any],
        expected: Optional[Conditions] = None
    ) -> Dict[str, Any]:
        """
        Merge fields into a document, stamp ``updatedAt``, return the result

        ``expected`` makes the write a compare-and-set: every (field, value)
        pair must hold on the stored document at write time, checked
        atomically with the write, or PreconditionFailedException is raised
        and nothing changes.
        """
        pass

    @abstractmethod
    async def query_equality(
        self,
        collection: str,
        conditions: Conditions,
        limit: int = 10
    ) -> List[Dict[str, Any]]:
        """Documents matching ALL conditions, unordered, at most ``limit``"""
        pass

    @abstractmethod
    async def query_range(
        self,
        collection: str,
        field: str,
        low: Any,
        high: Any,
        limit: int = 10
    ) -> List[Dict[str, Any]]:
        """Documents with ``low <= doc[field] <= high``, unordered, at most ``limit``"""
        pass

    @abstractmethod
    async def atomic_increment(
        self,
        collection: str,
        document_id: str,
        field: str,
        delta: int = 1
    ) -> None:
        """Add ``delta`` to a numeric field exactly once, whatever the concurrency"""
        pass
