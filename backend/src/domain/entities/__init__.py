"""Domain Entities - Core business objects"""

from .job_posting import JobPosting, JobLocation
from .job_seeker import JobSeekerProfile
from .match import Match
__all__ = ["JobPosting", "JobLocation", "JobSeekerProfile", "Match"]
