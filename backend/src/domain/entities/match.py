"""
Match Domain Entity
Pairing of one job posting with one job seeker
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..value_objects import MatchCriteria, MatchStatus


@dataclass(frozen=True)
class Match:
    """Match domain entity, unique per (job_id, job_seeker_id)"""

    id: Optional[str]
    job_id: str
    job_seeker_id: str
    employer_id: str
    score: float = 0.0
    criteria: MatchCriteria = field(default_factory=MatchCriteria)
    status: MatchStatus = MatchStatus.PENDING

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self) -> str:
        return f"Match(job={self.job_id}, seeker={self.job_seeker_id}, {self.status.value})"
