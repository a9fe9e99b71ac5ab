"""
Domain Enums
Business enumerations for the application
"""
from enum import Enum


class EmploymentType(str, Enum):
    """Employment type of a job posting"""
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    TEMPORARY = "temporary"


class LocationType(str, Enum):
    """Where the work happens"""
    ONSITE = "onsite"
    REMOTE = "remote"
    HYBRID = "hybrid"


class JobCounter(str, Enum):
    """Monotonic counters kept on a job document"""
    VIEWS = "views"
    RIGHT_SWIPES = "rightSwipeCount"


class Collection(str, Enum):
    """Document store collections"""
    JOBS = "jobs"
    JOB_SEEKERS = "job_seekers"
    MATCHES = "matches"
