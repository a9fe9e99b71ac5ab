"""Value Objects - Immutable objects defined by their attributes"""

from .geo_point import GeoPoint, BoundingBox
from .salary import Salary, SalaryType
from .job_status import JobStatus, MatchStatus, MATCH_TRANSITIONS
from .match_score import MatchScore, MatchCriteria
__all__ = [
    "GeoPoint",
    "BoundingBox",
    "Salary",
    "SalaryType",
    "JobStatus",
    "MatchStatus",
    "MATCH_TRANSITIONS",
    "MatchScore",
    "MatchCriteria",
]
