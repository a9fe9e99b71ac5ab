"""
JobSeekerProfile Domain Entity
"""
from dataclasses import dataclass
from typing import Optional, FrozenSet

from core.exceptions import ValidationException
from ..value_objects import GeoPoint, Salary

MIN_SEARCH_RADIUS_KM = 1.0
MAX_SEARCH_RADIUS_KM = 500.0


@dataclass(frozen=True)
class JobSeekerProfile:
    """Job seeker profile domain entity - immutable"""

    id: Optional[str]
    current_location: GeoPoint
    preferred_salary: Salary
    name: str = ""
    skills: FrozenSet[str] = frozenset()
    experience_years: int = 0
    search_radius_km: float = 50.0

    def __post_init__(self):
        """Validate profile data"""
        if self.experience_years < 0:
            raise ValidationException("experience_years", "cannot be negative")

        if not MIN_SEARCH_RADIUS_KM <= self.search_radius_km <= MAX_SEARCH_RADIUS_KM:
            raise ValidationException(
                "search_radius_km",
                f"must be between {MIN_SEARCH_RADIUS_KM:g} and {MAX_SEARCH_RADIUS_KM:g}"
            )

        if not isinstance(self.skills, frozenset):
            object.__setattr__(self, "skills", frozenset(self.skills))

    def __str__(self) -> str:
        return f"JobSeekerProfile({self.name or self.id})"
