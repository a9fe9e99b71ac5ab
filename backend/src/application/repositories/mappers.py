"""
Document Mappers
Convert domain entities to store documents (camelCase JSON) and back
"""
from datetime import datetime
from typing import Any, Dict, Optional

from domain.entities import JobPosting, JobLocation, JobSeekerProfile, Match
from domain.enums import LocationType
from domain.value_objects import GeoPoint, Salary, JobStatus, MatchStatus, MatchCriteria


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def job_to_document(job: JobPosting) -> Dict[str, Any]:
    """
    Serialize a job posting.

    ``location`` mirrors the primary location's coordinates so that the
    geo range query has a single composite field to work on.
    """
    return {
        "employerId": job.employer_id,
        "title": job.title,
        "description": job.description,
        "requirements": list(job.requirements),
        "responsibilities": list(job.responsibilities),
        "skills": sorted(job.skills),
        "benefits": list(job.benefits),
        "employmentType": str(getattr(job.employment_type, "value", job.employment_type)),
        "experienceLevel": job.experience_level,
        "salary": job.salary.to_dict(),
        "locationType": job.location_type.value,
        "locations": [
            {"address": loc.address, "coordinates": loc.coordinates.to_dict()}
            for loc in job.locations
        ],
        "location": job.primary_location.to_dict(),
        "status": job.status.value,
        "views": job.views,
        "rightSwipeCount": job.right_swipe_count,
        "expiresAt": job.expires_at.isoformat() if job.expires_at else None,
    }


def job_from_document(doc: Dict[str, Any]) -> JobPosting:
    return JobPosting(
        id=doc.get("id"),
        employer_id=doc.get("employerId", ""),
        title=doc.get("title", ""),
        description=doc.get("description", ""),
        requirements=list(doc.get("requirements") or []),
        responsibilities=list(doc.get("responsibilities") or []),
        skills=frozenset(doc.get("skills") or []),
        benefits=list(doc.get("benefits") or []),
        employment_type=doc.get("employmentType", "full-time"),
        experience_level=int(doc.get("experienceLevel") or 0),
        salary=Salary.from_dict(doc.get("salary") or {}),
        location_type=LocationType(doc.get("locationType") or LocationType.ONSITE.value),
        locations=[
            JobLocation(
                address=loc.get("address", ""),
                coordinates=GeoPoint.from_dict(loc["coordinates"]),
            )
            for loc in doc.get("locations") or []
        ],
        status=JobStatus(doc.get("status") or JobStatus.ACTIVE.value),
        views=int(doc.get("views") or 0),
        right_swipe_count=int(doc.get("rightSwipeCount") or 0),
        created_at=_parse_datetime(doc.get("createdAt")),
        updated_at=_parse_datetime(doc.get("updatedAt")),
        expires_at=_parse_datetime(doc.get("expiresAt")),
    )


def seeker_to_document(seeker: JobSeekerProfile) -> Dict[str, Any]:
    return {
        "name": seeker.name,
        "skills": sorted(seeker.skills),
        "experience": seeker.experience_years,
        "currentLocation": seeker.current_location.to_dict(),
        "location": seeker.current_location.to_dict(),
        "searchRadius": seeker.search_radius_km,
        "preferredSalary": seeker.preferred_salary.to_dict(),
    }


def seeker_from_document(doc: Dict[str, Any]) -> JobSeekerProfile:
    return JobSeekerProfile(
        id=doc.get("id"),
        name=doc.get("name", ""),
        skills=frozenset(doc.get("skills") or []),
        experience_years=int(doc.get("experience") or 0),
        current_location=GeoPoint.from_dict(doc["currentLocation"]),
        search_radius_km=float(doc.get("searchRadius") or 50),
        preferred_salary=Salary.from_dict(doc.get("preferredSalary") or {"isNegotiable": True}),
    )


def match_to_document(match: Match) -> Dict[str, Any]:
    return {
        "jobId": match.job_id,
        "jobSeekerId": match.job_seeker_id,
        "employerId": match.employer_id,
        "score": match.score,
        "matchCriteria": match.criteria.to_dict(),
        "status": match.status.value,
    }


def match_from_document(doc: Dict[str, Any]) -> Match:
    return Match(
        id=doc.get("id"),
        job_id=doc["jobId"],
        job_seeker_id=doc["jobSeekerId"],
        employer_id=doc.get("employerId", ""),
        score=float(doc.get("score") or 0),
        criteria=MatchCriteria.from_dict(doc.get("matchCriteria") or {}),
        status=MatchStatus(doc.get("status") or MatchStatus.PENDING.value),
        created_at=_parse_datetime(doc.get("createdAt")),
        updated_at=_parse_datetime(doc.get("updatedAt")),
    )
