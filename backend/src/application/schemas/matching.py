"""
Matching Schemas
Pydantic schemas for job search predicates
"""
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from domain.value_objects import JobStatus


class JobSearchFilters(BaseModel):
    """
    Optional business predicates applied after a candidate search.

    Absent fields do not filter. ``skills`` uses AND semantics: every listed
    skill must be present on the job.
    """

    status: Optional[JobStatus] = None
    employment_type: Optional[str] = None
    experience_level: Optional[int] = Field(None, ge=0)
    min_salary: Optional[float] = Field(None, ge=0)
    max_salary: Optional[float] = Field(None, ge=0)
    skills: List[str] = Field(default_factory=list)

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "status": "active",
                "employment_type": "full-time",
                "experience_level": 2,
                "min_salary": 30000,
                "max_salary": 80000,
                "skills": ["python", "sql"]
            }
        }
    }

    @model_validator(mode="after")
    def check_salary_bounds(self) -> "JobSearchFilters":
        if (
            self.min_salary is not None
            and self.max_salary is not None
            and self.min_salary > self.max_salary
        ):
            raise ValueError("min_salary cannot exceed max_salary")
        return self

    def with_default_status(self, status: JobStatus) -> "JobSearchFilters":
        """Copy with ``status`` filled in when the caller left it open"""
        if self.status is not None:
            return self
        return self.model_copy(update={"status": status})
