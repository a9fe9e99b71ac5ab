"""
Criteria Filter
Exact business predicates over a candidate set of job records
"""
from typing import Any, Dict, Iterable, List, Optional, Tuple, TypeVar, Union

from application.schemas.matching import JobSearchFilters
from domain.entities import JobPosting
from .skills import normalize_skills

JobRecord = Union[Dict[str, Any], JobPosting]
R = TypeVar("R", Dict[str, Any], JobPosting)


def _fields(record: JobRecord) -> Tuple[Any, Any, Any, Optional[float], Iterable[str]]:
    """(status, employment type, experience level, salary amount, skills) of a record"""
    if isinstance(record, JobPosting):
        return (
            record.status.value,
            getattr(record.employment_type, "value", record.employment_type),
            record.experience_level,
            record.salary.amount,
            record.skills,
        )
    salary = record.get("salary") or {}
    return (
        record.get("status"),
        record.get("employmentType"),
        record.get("experienceLevel"),
        salary.get("amount"),
        record.get("skills") or [],
    )


def matches_filters(record: JobRecord, filters: JobSearchFilters) -> bool:
    """Apply status, employment type, experience, salary range and skills, in that order"""
    status, employment_type, experience_level, amount, skills = _fields(record)

    if filters.status is not None and status != filters.status.value:
        return False

    if filters.employment_type is not None and employment_type != filters.employment_type:
        return False

    if filters.experience_level is not None and experience_level != filters.experience_level:
        return False

    if filters.min_salary is not None or filters.max_salary is not None:
        if amount is None:
            return False
        if filters.min_salary is not None and amount < filters.min_salary:
            return False
        if filters.max_salary is not None and amount > filters.max_salary:
            return False

    if filters.skills:
        if not normalize_skills(filters.skills) <= normalize_skills(skills):
            return False

    return True


def filter_records(records: Iterable[R], filters: Optional[JobSearchFilters] = None) -> List[R]:
    """
    Subset of ``records`` satisfying every given predicate, order preserved.

    Pure and idempotent; an empty result is a valid answer.
    """
    if filters is None:
        return list(records)
    return [record for record in records if matches_filters(record, filters)]
