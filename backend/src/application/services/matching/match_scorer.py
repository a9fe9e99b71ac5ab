"""
Match Scorer
Weighted compatibility score between one job posting and one job seeker
"""
from dataclasses import dataclass

from core.exceptions import ValidationException
from domain.entities import JobPosting, JobSeekerProfile
from domain.value_objects import MatchCriteria, MatchScore, Salary
from .geo_math import haversine_distance_km
from .skills import normalize_skills

SKILLS_WEIGHT = 0.30
EXPERIENCE_POINTS = 25.0
LOCATION_POINTS = 25.0
SALARY_POINTS = 20.0

# Job pay may fall up to 10% short of the seeker's expectation
DEFAULT_SALARY_TOLERANCE = 0.9


@dataclass(frozen=True)
class ScoreResult:
    """Total score plus the breakdown behind it"""

    score: float
    criteria: MatchCriteria

    @property
    def match_score(self) -> MatchScore:
        return MatchScore(self.score)


def skills_match_pct(job_skills, seeker_skills) -> float:
    """
    Share of the job's required skills the seeker has, 0-100

    Raises:
        ValidationException: job lists no skills
    """
    required = normalize_skills(job_skills)
    if not required:
        raise ValidationException("skills", "job has no required skills to match against")
    matched = required & normalize_skills(seeker_skills)
    return len(matched) / len(required) * 100


def salary_matches(
    job_salary: Salary,
    preferred: Salary,
    tolerance: float = DEFAULT_SALARY_TOLERANCE
) -> bool:
    """Negotiable seekers always match; otherwise compare annualised pay"""
    if preferred.is_negotiable:
        return True
    return job_salary.annual_amount() >= preferred.annual_amount() * tolerance


def location_matches(job: JobPosting, seeker: JobSeekerProfile) -> bool:
    """
    Binary distance check against the seeker's search radius.

    Only the job's first listed location is considered; a job with several
    sites is scored as if it sat at its primary one.
    """
    distance = haversine_distance_km(job.primary_location, seeker.current_location)
    return distance <= seeker.search_radius_km


def score(
    job: JobPosting,
    seeker: JobSeekerProfile,
    salary_tolerance: float = DEFAULT_SALARY_TOLERANCE
) -> ScoreResult:
    """
    Score a job/seeker pair.

    Skills 30% (proportional), experience 25%, location 25% and salary 20%
    (binary each). Pure: no I/O, same inputs give the same result.

    Returns:
        ScoreResult with score in [0, 100]
    """
    pct = skills_match_pct(job.skills, seeker.skills)
    experience_ok = seeker.experience_years >= job.experience_level
    location_ok = location_matches(job, seeker)
    salary_ok = salary_matches(job.salary, seeker.preferred_salary, salary_tolerance)

    total = pct * SKILLS_WEIGHT
    total += EXPERIENCE_POINTS if experience_ok else 0.0
    total += LOCATION_POINTS if location_ok else 0.0
    total += SALARY_POINTS if salary_ok else 0.0

    return ScoreResult(
        score=min(100.0, max(0.0, total)),
        criteria=MatchCriteria(
            skills_match_pct=pct,
            location_match=location_ok,
            experience_match=experience_ok,
            salary_match=salary_ok,
        ),
    )
