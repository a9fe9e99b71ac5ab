"""
Tests for the generic entity repository
"""
import pytest

from application.repositories import job_repository, seeker_repository
from core.exceptions import ResourceNotFoundException
from domain.value_objects import GeoPoint, JobStatus
from conftest import BANGALORE, point_north_of


class TestRepository:
    """Test entity <-> document round trips through a store"""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamps(self, store, make_job):
        job = await job_repository(store).create(make_job(job_id=None))

        assert job.id
        assert job.created_at is not None
        assert job.skills == frozenset({"go", "sql"})
        assert job.status == JobStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_find_and_get(self, store, make_seeker):
        seekers = seeker_repository(store)
        seeker = await seekers.create(make_seeker())

        assert (await seekers.find(seeker.id)).current_location == BANGALORE
        assert await seekers.find("ghost") is None
        with pytest.raises(ResourceNotFoundException) as exc:
            await seekers.get("ghost")
        assert exc.value.resource_type == "JobSeeker"

    @pytest.mark.asyncio
    async def test_query_range_on_location(self, store, make_job):
        jobs = job_repository(store)
        await jobs.create(make_job(title="Near"))
        await jobs.create(make_job(title="Far", location=point_north_of(BANGALORE, 200)))

        found = await jobs.query_range(
            "location",
            GeoPoint(BANGALORE.latitude - 0.5, -180.0),
            GeoPoint(BANGALORE.latitude + 0.5, 180.0),
        )

        assert [j.title for j in found] == ["Near"]
