"""
Job Schemas
Pydantic schemas for creating and editing job postings
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from domain.enums import EmploymentType, LocationType
from domain.value_objects import SalaryType


class LocationInput(BaseModel):
    """One job site"""

    address: str = ""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class SalaryInput(BaseModel):
    """Offered pay"""

    amount: float = Field(..., ge=0)
    type: SalaryType = SalaryType.MONTHLY
    currency: Optional[str] = None
    is_negotiable: bool = False


class JobCreate(BaseModel):
    """Request schema for a new job posting"""

    title: str = Field(..., min_length=1)
    description: str = ""
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    location_type: LocationType = LocationType.ONSITE
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    experience_level: int = Field(0, ge=0)
    salary: SalaryInput
    locations: List[LocationInput] = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Backend Engineer",
                "skills": ["go", "sql"],
                "employment_type": "full-time",
                "experience_level": 3,
                "salary": {"amount": 90000, "type": "monthly", "currency": "INR"},
                "locations": [{"address": "MG Road, Bengaluru", "latitude": 12.975, "longitude": 77.605}]
            }
        }
    }


class JobUpdate(BaseModel):
    """Editable job fields; status and counters change through dedicated calls"""

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    requirements: Optional[List[str]] = None
    responsibilities: Optional[List[str]] = None
    skills: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    location_type: Optional[LocationType] = None
    employment_type: Optional[EmploymentType] = None
    experience_level: Optional[int] = Field(None, ge=0)
    salary: Optional[SalaryInput] = None
    locations: Optional[List[LocationInput]] = Field(None, min_length=1)
