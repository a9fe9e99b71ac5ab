"""
Jobs Service Package
"""
from .job_service import JobService

__all__ = [
    "JobService",
]
