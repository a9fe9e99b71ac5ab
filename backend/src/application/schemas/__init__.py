"""Request schemas"""

from .matching import JobSearchFilters
from .job import JobCreate, JobUpdate, LocationInput, SalaryInput
from .profile import ProfileCreate, ProfileUpdate

__all__ = [
    "JobSearchFilters",
    "JobCreate",
    "JobUpdate",
    "LocationInput",
    "SalaryInput",
    "ProfileCreate",
    "ProfileUpdate",
]
