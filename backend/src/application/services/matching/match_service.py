"""
Match Service
Candidate search, scoring and the lifecycle of match records
"""
from typing import List, Optional, Tuple, Union

from loguru import logger

from application.repositories import (
    IDocumentStore,
    job_repository,
    match_repository,
    seeker_repository,
)
from application.schemas.matching import JobSearchFilters
from core.exceptions import (
    DuplicateResourceException,
    InvalidTransitionException,
    PreconditionFailedException,
    ValidationException,
)
from domain.entities import JobPosting, JobSeekerProfile, Match
from domain.enums import Collection
from domain.value_objects import JobStatus, MatchCriteria, MatchStatus
from .bounding_box_search import BoundingBoxSearch
from .criteria_filter import filter_records
from .match_scorer import ScoreResult, score, DEFAULT_SALARY_TOLERANCE

# Fields identifying a match; at most one match exists per pair
MATCH_PAIR_FIELDS = ("jobId", "jobSeekerId")


class MatchService:
    """
    Orchestrates search -> filter -> score and owns match records.

    Match creation is check-then-act. Stores that honour ``unique_on`` turn
    the pair uniqueness into a hard guarantee; a store that ignores it leaves
    a narrow window where two concurrent creates for one pair both insert.
    """

    def __init__(
        self,
        store: IDocumentStore,
        search: Optional[BoundingBoxSearch] = None,
        salary_tolerance: float = DEFAULT_SALARY_TOLERANCE,
        default_limit: int = 10
    ):
        self.store = store
        self.search = search or BoundingBoxSearch(store)
        self.salary_tolerance = salary_tolerance
        self.default_limit = default_limit
        self.jobs = job_repository(store)
        self.seekers = seeker_repository(store)
        self.matches = match_repository(store)

    async def find_match(self, job_id: str, job_seeker_id: str) -> Optional[Match]:
        """Existing match for the pair, if any"""
        found = await self.matches.query(
            [("jobId", job_id), ("jobSeekerId", job_seeker_id)], limit=1
        )
        return found[0] if found else None

    async def create_match(
        self,
        job_id: str,
        job_seeker_id: str,
        employer_id: str,
        criteria: Optional[MatchCriteria] = None,
        match_score: float = 0.0
    ) -> Match:
        """
        Create a pending match, or return the one that already exists for the pair.

        Calling twice with the same (job_id, job_seeker_id) yields the same match id.
        """
        if not job_id or not job_seeker_id or not employer_id:
            raise ValidationException("match", "job_id, job_seeker_id and employer_id are required")

        existing = await self.find_match(job_id, job_seeker_id)
        if existing:
            logger.debug(f"Match already exists for job={job_id} seeker={job_seeker_id}")
            return existing

        match = Match(
            id=None,
            job_id=job_id,
            job_seeker_id=job_seeker_id,
            employer_id=employer_id,
            score=match_score,
            criteria=criteria or MatchCriteria(),
            status=MatchStatus.PENDING,
        )
        try:
            created = await self.matches.create(match, unique_on=MATCH_PAIR_FIELDS)
        except DuplicateResourceException:
            # Lost a race with a concurrent create for the same pair
            logger.warning(f"Concurrent match create for job={job_id} seeker={job_seeker_id}")
            existing = await self.find_match(job_id, job_seeker_id)
            if existing is None:
                raise
            return existing

        logger.info(f"Match {created.id} created: job={job_id} seeker={job_seeker_id} score={match_score:.1f}")
        return created

    async def match_job_to_seeker(self, job_id: str, job_seeker_id: str) -> Match:
        """Score a stored job against a stored seeker and record the match"""
        job = await self.jobs.get(job_id)
        seeker = await self.seekers.get(job_seeker_id)
        result = self.score(job, seeker)
        return await self.create_match(
            job.id, seeker.id, job.employer_id,
            criteria=result.criteria, match_score=result.score
        )

    def score(self, job: JobPosting, seeker: JobSeekerProfile) -> ScoreResult:
        return score(job, seeker, self.salary_tolerance)

    async def get_match(self, match_id: str) -> Match:
        return await self.matches.get(match_id)

    async def update_match_status(
        self,
        match_id: str,
        new_status: Union[MatchStatus, str]
    ) -> Match:
        """
        Move a pending match to accepted or rejected.

        Raises:
            ValidationException: unknown status value
            ResourceNotFoundException: no match with this id
            InvalidTransitionException: match already accepted or rejected
        """
        try:
            target = MatchStatus(new_status)
        except ValueError:
            raise ValidationException("status", f"unknown match status: {new_status}")

        match = await self.matches.get(match_id)
        if not match.status.can_transition_to(target):
            raise InvalidTransitionException("Match", match.status.value, target.value)

        try:
            # Compare-and-set on the status we just checked
            updated = await self.matches.update(
                match_id, {"status": target.value}, expected=[("status", match.status.value)]
            )
        except PreconditionFailedException:
            current = await self.matches.get(match_id)
            logger.warning(
                f"Match {match_id} changed to {current.status.value} before {target.value} was applied"
            )
            raise InvalidTransitionException("Match", current.status.value, target.value)

        logger.info(f"Match {match_id}: {match.status.value} -> {target.value}")
        return updated

    async def _list(
        self,
        field: str,
        value: str,
        status: Optional[Union[MatchStatus, str]],
        limit: Optional[int]
    ) -> List[Match]:
        conditions = [(field, value)]
        if status:
            try:
                conditions.append(("status", MatchStatus(status).value))
            except ValueError:
                raise ValidationException("status", f"unknown match status: {status}")
        return await self.matches.query(conditions, limit or self.default_limit)

    async def matches_by_job_seeker(
        self, job_seeker_id: str, status: Optional[Union[MatchStatus, str]] = None, limit: Optional[int] = None
    ) -> List[Match]:
        return await self._list("jobSeekerId", job_seeker_id, status, limit)

    async def matches_by_employer(
        self, employer_id: str, status: Optional[Union[MatchStatus, str]] = None, limit: Optional[int] = None
    ) -> List[Match]:
        return await self._list("employerId", employer_id, status, limit)

    async def matches_by_job(
        self, job_id: str, status: Optional[Union[MatchStatus, str]] = None, limit: Optional[int] = None
    ) -> List[Match]:
        return await self._list("jobId", job_id, status, limit)

    async def recommend_jobs(
        self,
        seeker: JobSeekerProfile,
        filters: Optional[JobSearchFilters] = None,
        limit: Optional[int] = None
    ) -> List[Tuple[JobPosting, ScoreResult]]:
        """
        Jobs within the seeker's radius that pass the filters, best score first.

        Only active jobs are considered unless the filters name a status.
        Jobs listing no skills cannot be scored and are skipped.
        """
        limit = limit or self.default_limit
        filters = (filters or JobSearchFilters()).with_default_status(JobStatus.ACTIVE)

        records = await self.search.find_nearby_exact(
            Collection.JOBS.value, seeker.current_location, seeker.search_radius_km, limit
        )
        candidates = filter_records(records, filters)

        scored = []
        for record in candidates:
            job = self.jobs.from_document(record)
            try:
                scored.append((job, self.score(job, seeker)))
            except ValidationException as e:
                logger.warning(f"Skipping job {job.id} in recommendations: {e}")

        scored.sort(key=lambda pair: pair[1].score, reverse=True)
        logger.debug(f"{len(scored)} recommendations for seeker {seeker.id}")
        return scored
