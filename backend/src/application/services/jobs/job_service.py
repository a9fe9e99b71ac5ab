"""
Job Service
Job posting lifecycle, search and counters
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from application.repositories import IDocumentStore, job_repository
from application.schemas.job import JobCreate, JobUpdate, LocationInput, SalaryInput
from application.schemas.matching import JobSearchFilters
from application.services.matching.bounding_box_search import BoundingBoxSearch
from application.services.matching.criteria_filter import filter_records
from core.exceptions import AuthorizationException, ValidationException
from domain.entities import JobPosting, JobLocation
from domain.enums import Collection, JobCounter
from domain.value_objects import GeoPoint, Salary, JobStatus


def _salary(data: SalaryInput, default_currency: str) -> Salary:
    return Salary(
        amount=data.amount,
        type=data.type,
        currency=data.currency or default_currency,
        is_negotiable=data.is_negotiable,
    )


def _locations(data: List[LocationInput]) -> List[JobLocation]:
    return [
        JobLocation(address=loc.address, coordinates=GeoPoint(loc.latitude, loc.longitude))
        for loc in data
    ]


class JobService:
    """Employer-side job operations on top of the jobs collection"""

    def __init__(
        self,
        store: IDocumentStore,
        search: Optional[BoundingBoxSearch] = None,
        expiry_days: int = 30,
        default_currency: str = "INR",
        default_limit: int = 10
    ):
        self.jobs = job_repository(store)
        self.search = search or BoundingBoxSearch(store)
        self.expiry_days = expiry_days
        self.default_currency = default_currency
        self.default_limit = default_limit

    async def create_job(self, employer_id: str, data: JobCreate) -> JobPosting:
        """Create an active job with zeroed counters, expiring after ``expiry_days``"""
        job = JobPosting(
            id=None,
            employer_id=employer_id,
            title=data.title,
            description=data.description,
            requirements=list(data.requirements),
            responsibilities=list(data.responsibilities),
            skills=frozenset(data.skills),
            benefits=list(data.benefits),
            location_type=data.location_type,
            employment_type=data.employment_type,
            experience_level=data.experience_level,
            salary=_salary(data.salary, self.default_currency),
            locations=_locations(data.locations),
            status=JobStatus.ACTIVE,
            expires_at=datetime.now(timezone.utc) + timedelta(days=self.expiry_days),
        )
        created = await self.jobs.create(job)
        logger.info(f"Job {created.id} created by employer {employer_id}: {created.title}")
        return created

    async def get_job(self, job_id: str, record_view: bool = True) -> JobPosting:
        """Fetch a job; counts a view unless told not to"""
        job = await self.jobs.get(job_id)
        if record_view:
            await self.jobs.increment(job_id, JobCounter.VIEWS.value)
        return job

    async def _owned_job(self, job_id: str, employer_id: str) -> JobPosting:
        job = await self.jobs.get(job_id)
        if job.employer_id != employer_id:
            logger.warning(f"Employer {employer_id} tried to modify job {job_id}")
            raise AuthorizationException("You can only modify your own job posts")
        return job

    async def update_job(self, job_id: str, employer_id: str, data: JobUpdate) -> JobPosting:
        """Edit job fields; only the owning employer may do so"""
        await self._owned_job(job_id, employer_id)

        changes = data.model_dump(exclude_unset=True, mode="json")
        fields: Dict[str, Any] = {}
        simple = {
            "title": "title",
            "description": "description",
            "requirements": "requirements",
            "responsibilities": "responsibilities",
            "benefits": "benefits",
            "employment_type": "employmentType",
            "experience_level": "experienceLevel",
        }
        for attr, key in simple.items():
            if attr in changes and changes[attr] is not None:
                fields[key] = changes[attr]

        if data.skills is not None:
            fields["skills"] = sorted(set(data.skills))
        if data.location_type is not None:
            fields["locationType"] = data.location_type.value
        if data.salary is not None:
            fields["salary"] = _salary(data.salary, self.default_currency).to_dict()
        if data.locations is not None:
            locations = _locations(data.locations)
            fields["locations"] = [
                {"address": loc.address, "coordinates": loc.coordinates.to_dict()}
                for loc in locations
            ]
            fields["location"] = locations[0].coordinates.to_dict()

        if not fields:
            return await self.jobs.get(job_id)

        updated = await self.jobs.update(job_id, fields)
        logger.info(f"Job {job_id} updated: {sorted(fields)}")
        return updated

    async def close_job(self, job_id: str, employer_id: str) -> JobPosting:
        """Close instead of deleting; closed jobs drop out of searches"""
        await self._owned_job(job_id, employer_id)
        closed = await self.jobs.update(job_id, {"status": JobStatus.CLOSED.value})
        logger.info(f"Job {job_id} closed")
        return closed

    async def jobs_by_employer(
        self,
        employer_id: str,
        status: Optional[Union[JobStatus, str]] = None,
        limit: Optional[int] = None
    ) -> List[JobPosting]:
        conditions = [("employerId", employer_id)]
        if status:
            try:
                conditions.append(("status", JobStatus(status).value))
            except ValueError:
                raise ValidationException("status", f"unknown job status: {status}")
        return await self.jobs.query(conditions, limit or self.default_limit)

    async def search_jobs(
        self,
        filters: Optional[JobSearchFilters] = None,
        limit: Optional[int] = None
    ) -> List[JobPosting]:
        """Location-free search: equality predicates in the store, the rest in memory"""
        filters = (filters or JobSearchFilters()).with_default_status(JobStatus.ACTIVE)

        conditions = [("status", filters.status.value)]
        if filters.employment_type:
            conditions.append(("employmentType", filters.employment_type))
        if filters.experience_level is not None:
            conditions.append(("experienceLevel", filters.experience_level))

        jobs = await self.jobs.query(conditions, limit or self.default_limit)
        return filter_records(jobs, filters)

    async def find_nearby_jobs(
        self,
        center: GeoPoint,
        radius_km: float,
        filters: Optional[JobSearchFilters] = None,
        exact: bool = True,
        limit: Optional[int] = None
    ) -> List[JobPosting]:
        """
        Jobs around a point, filtered.

        With ``exact=False`` the raw bounding-box result is used, which can
        include jobs slightly beyond ``radius_km`` near the box corners.
        """
        filters = (filters or JobSearchFilters()).with_default_status(JobStatus.ACTIVE)
        limit = limit or self.default_limit
        find = self.search.find_nearby_exact if exact else self.search.find_nearby

        records = await find(Collection.JOBS.value, center, radius_km, limit)
        return [self.jobs.from_document(record) for record in filter_records(records, filters)]

    async def increment_counter(
        self,
        job_id: str,
        field: Union[JobCounter, str],
        delta: int = 1
    ) -> None:
        """Atomically bump ``views`` or ``rightSwipeCount``; counters never decrease"""
        try:
            counter = JobCounter(field)
        except ValueError:
            raise ValidationException("field", f"not a job counter: {field}")

        if isinstance(delta, bool) or not isinstance(delta, int) or delta < 1:
            raise ValidationException("delta", "must be a positive integer")

        await self.jobs.increment(job_id, counter.value, delta)

    async def record_right_swipe(self, job_id: str) -> None:
        await self.increment_counter(job_id, JobCounter.RIGHT_SWIPES)
