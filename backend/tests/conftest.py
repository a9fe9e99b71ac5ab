"""
Shared fixtures: an in-memory store and builders for domain objects
"""
import math

import pytest

from application.services.matching import BoundingBoxSearch, MatchService
from application.services.jobs import JobService
from application.services.profile import ProfileService
from domain.entities import JobPosting, JobLocation, JobSeekerProfile
from domain.value_objects import GeoPoint, Salary, SalaryType
from infrastructure.persistence.memory_store import InMemoryDocumentStore

EARTH_RADIUS_KM = 6371.0

# MG Road, Bengaluru
BANGALORE = GeoPoint(12.9716, 77.5946)


def point_north_of(origin: GeoPoint, km: float) -> GeoPoint:
    """Point exactly ``km`` kilometres due north of origin (along a meridian)"""
    return GeoPoint(origin.latitude + math.degrees(km / EARTH_RADIUS_KM), origin.longitude)


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def search(store):
    return BoundingBoxSearch(store)


@pytest.fixture
def match_service(store, search):
    return MatchService(store, search=search)


@pytest.fixture
def job_service(store, search):
    return JobService(store, search=search)


@pytest.fixture
def profile_service(store, search):
    return ProfileService(store, search=search)


@pytest.fixture
def make_job():
    def _make_job(
        skills=("go", "sql"),
        location=BANGALORE,
        experience_level=2,
        salary=None,
        employer_id="employer-1",
        job_id="job-1",
        **kwargs
    ) -> JobPosting:
        return JobPosting(
            id=job_id,
            employer_id=employer_id,
            title=kwargs.pop("title", "Backend Engineer"),
            skills=frozenset(skills),
            experience_level=experience_level,
            salary=salary or Salary(amount=100000, type=SalaryType.MONTHLY),
            locations=[JobLocation(address="Office", coordinates=location)],
            **kwargs
        )
    return _make_job


@pytest.fixture
def make_seeker():
    def _make_seeker(
        skills=("go", "sql", "python"),
        location=BANGALORE,
        experience_years=3,
        radius_km=10.0,
        preferred_salary=None,
        seeker_id="seeker-1"
    ) -> JobSeekerProfile:
        return JobSeekerProfile(
            id=seeker_id,
            name="Asha",
            skills=frozenset(skills),
            experience_years=experience_years,
            current_location=location,
            search_radius_km=radius_km,
            preferred_salary=preferred_salary or Salary(amount=90000, type=SalaryType.MONTHLY),
        )
    return _make_seeker
