"""
Tests for the SQLAlchemy document store, run against SQLite via aiosqlite
"""
import asyncio

import pytest

from core.database import create_engine, create_session_factory, init_db, close_db
from application.services.matching import MatchService
from core.exceptions import (
    DuplicateResourceException,
    InvalidTransitionException,
    PreconditionFailedException,
    ResourceNotFoundException,
    ValidationException,
)
from domain.value_objects import GeoPoint, MatchStatus
from infrastructure.persistence.repositories.document_store import SQLAlchemyDocumentStore


async def open_store(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}")
    await init_db(engine)
    return engine, SQLAlchemyDocumentStore(create_session_factory(engine))


def job(title: str, lat: float, lng: float, **extra) -> dict:
    data = {
        "title": title,
        "status": "active",
        "experienceLevel": 2,
        "salary": {"amount": 50000, "type": "monthly"},
        "location": {"latitude": lat, "longitude": lng},
        "views": 0,
    }
    data.update(extra)
    return data


class TestSQLAlchemyDocumentStore:
    """Test CRUD, queries and increments on the documents table"""

    @pytest.mark.asyncio
    async def test_create_get_update(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            doc_id = await store.create("jobs", job("Engineer", 12.9, 77.5))

            record = await store.get_by_id("jobs", doc_id)
            assert record["title"] == "Engineer"
            assert record["id"] == doc_id
            assert record["createdAt"] is not None
            assert await store.get_by_id("matches", doc_id) is None

            updated = await store.update("jobs", doc_id, {"status": "closed"})
            assert updated["status"] == "closed"
            assert updated["title"] == "Engineer"
            assert (await store.get_by_id("jobs", doc_id))["status"] == "closed"
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_update_missing(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            with pytest.raises(ResourceNotFoundException):
                await store.update("jobs", "ghost", {"title": "x"})
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_query_equality(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            await store.create("jobs", job("A", 12.9, 77.5))
            await store.create("jobs", job("B", 12.9, 77.5, experienceLevel=5))
            await store.create("jobs", job("C", 12.9, 77.5, status="closed"))

            active = await store.query_equality("jobs", [("status", "active")])
            assert {r["title"] for r in active} == {"A", "B"}

            senior = await store.query_equality(
                "jobs", [("status", "active"), ("experienceLevel", 5)]
            )
            assert [r["title"] for r in senior] == ["B"]

            nested = await store.query_equality("jobs", [("salary.type", "monthly")], limit=2)
            assert len(nested) == 2
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_enum_values_are_normalized(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            await store.create("matches", {"jobId": "j1", "status": MatchStatus.PENDING})

            found = await store.query_equality("matches", [("status", MatchStatus.PENDING)])

            assert len(found) == 1
            assert found[0]["status"] == "pending"
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_geo_range_is_lexicographic(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            await store.create("jobs", job("band", 10.5, 100.0))
            await store.create("jobs", job("edge-in", 10.0, 5.0))
            await store.create("jobs", job("edge-out", 10.0, 1.0))
            await store.create("jobs", job("above", 12.0, 5.0))

            found = await store.query_range(
                "jobs", "location", GeoPoint(10.0, 2.0), GeoPoint(11.0, 8.0)
            )

            assert {r["title"] for r in found} == {"band", "edge-in"}
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_scalar_range(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            for level in (1, 3, 7):
                await store.create("jobs", job(f"L{level}", 0.0, 0.0, experienceLevel=level))

            found = await store.query_range("jobs", "experienceLevel", 2, 7)

            assert {r["title"] for r in found} == {"L3", "L7"}
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_unique_on(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            pair = {"jobId": "j1", "jobSeekerId": "s1", "status": "pending"}
            await store.create("matches", pair, unique_on=("jobId", "jobSeekerId"))

            with pytest.raises(DuplicateResourceException):
                await store.create("matches", pair, unique_on=("jobId", "jobSeekerId"))

            # Same values in another collection do not collide
            await store.create("other", pair, unique_on=("jobId", "jobSeekerId"))
            # Without unique_on duplicates are allowed
            await store.create("matches", pair)
            assert len(await store.query_equality("matches", [("jobId", "j1")])) == 2
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_atomic_increment(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            doc_id = await store.create("jobs", job("A", 0.0, 0.0))

            for _ in range(5):
                await store.atomic_increment("jobs", doc_id, "views")
            await store.atomic_increment("jobs", doc_id, "rightSwipeCount", 2)

            record = await store.get_by_id("jobs", doc_id)
            assert record["views"] == 5
            assert record["rightSwipeCount"] == 2

            with pytest.raises(ValidationException):
                await store.atomic_increment("jobs", doc_id, "title")
            with pytest.raises(ResourceNotFoundException):
                await store.atomic_increment("jobs", "ghost", "views")
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_concurrent_increments_are_not_lost(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            doc_id = await store.create("jobs", job("A", 0.0, 0.0))

            await asyncio.gather(
                *(store.atomic_increment("jobs", doc_id, "views") for _ in range(20))
            )

            assert (await store.get_by_id("jobs", doc_id))["views"] == 20
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_concurrent_updates_merge(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            doc_id = await store.create("jobs", job("A", 0.0, 0.0))

            await asyncio.gather(
                store.update("jobs", doc_id, {"title": "B"}),
                store.update("jobs", doc_id, {"status": "closed"}),
            )

            record = await store.get_by_id("jobs", doc_id)
            assert record["title"] == "B"
            assert record["status"] == "closed"
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_update_with_expected_values(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            doc_id = await store.create("matches", {"jobId": "j1", "status": "pending"})

            await store.update(
                "matches", doc_id, {"status": "accepted"}, expected=[("status", "pending")]
            )
            with pytest.raises(PreconditionFailedException) as exc:
                await store.update(
                    "matches", doc_id, {"status": "rejected"}, expected=[("status", "pending")]
                )

            assert exc.value.field == "status"
            assert (await store.get_by_id("matches", doc_id))["status"] == "accepted"
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_concurrent_match_decisions(self, tmp_path):
        engine, store = await open_store(tmp_path)
        try:
            service = MatchService(store)
            match = await service.create_match("j1", "s1", "e1")

            results = await asyncio.gather(
                service.update_match_status(match.id, "accepted"),
                service.update_match_status(match.id, "rejected"),
                return_exceptions=True,
            )

            decided = [r for r in results if not isinstance(r, Exception)]
            refused = [r for r in results if isinstance(r, InvalidTransitionException)]
            assert len(decided) == 1
            assert len(refused) == 1
            stored = await service.get_match(match.id)
            assert stored.status == decided[0].status
        finally:
            await close_db(engine)
