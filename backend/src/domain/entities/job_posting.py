"""
JobPosting Domain Entity
Immutable job posting business object
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, FrozenSet

from core.exceptions import ValidationException
from ..value_objects import GeoPoint, Salary, JobStatus
from ..enums import LocationType


@dataclass(frozen=True)
class JobLocation:
    """One place a job can be worked from"""

    address: str
    coordinates: GeoPoint


@dataclass(frozen=True)
class JobPosting:
    """Job posting domain entity - immutable"""

    id: Optional[str]
    employer_id: str
    title: str
    salary: Salary
    locations: List[JobLocation]

    # Job details
    employment_type: str = "full-time"
    experience_level: int = 0  # ordinal, compared against seeker experience years
    skills: FrozenSet[str] = frozenset()
    description: str = ""
    requirements: List[str] = field(default_factory=list)
    responsibilities: List[str] = field(default_factory=list)
    benefits: List[str] = field(default_factory=list)
    location_type: LocationType = LocationType.ONSITE

    # Status
    status: JobStatus = JobStatus.ACTIVE

    # Counters, only ever changed through atomic increments
    views: int = 0
    right_swipe_count: int = 0

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate job data"""
        if not self.title or len(self.title.strip()) == 0:
            raise ValidationException("title", "cannot be empty")

        if not self.employer_id:
            raise ValidationException("employer_id", "cannot be empty")

        if not self.locations:
            raise ValidationException("locations", "at least one location is required")

        if self.experience_level < 0:
            raise ValidationException("experience_level", "cannot be negative")

        if not isinstance(self.skills, frozenset):
            object.__setattr__(self, "skills", frozenset(self.skills))

    @property
    def primary_location(self) -> GeoPoint:
        """First listed location; the reference point for distance scoring"""
        return self.locations[0].coordinates

    def __str__(self) -> str:
        return f"JobPosting({self.title} by {self.employer_id})"
