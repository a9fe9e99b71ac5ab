"""
Profile Schemas
Pydantic schemas for job seeker profiles
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from .job import SalaryInput


class ProfileCreate(BaseModel):
    """Request schema for a new job seeker profile"""

    name: str = ""
    skills: List[str] = Field(default_factory=list)
    experience_years: int = Field(0, ge=0)
    latitude: float = Field(0.0, ge=-90, le=90)
    longitude: float = Field(0.0, ge=-180, le=180)
    search_radius_km: Optional[float] = Field(None, ge=1, le=500)
    preferred_salary: Optional[SalaryInput] = None


class ProfileUpdate(BaseModel):
    """Editable profile fields; location changes through update_location"""

    name: Optional[str] = None
    skills: Optional[List[str]] = None
    experience_years: Optional[int] = Field(None, ge=0)
    search_radius_km: Optional[float] = Field(None, ge=1, le=500)
    preferred_salary: Optional[SalaryInput] = None
