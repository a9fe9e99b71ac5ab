"""
Match Value Objects
Compatibility score (0-100) and its per-criterion breakdown
"""
from dataclasses import dataclass
from typing import Any, Dict

from core.exceptions import ValidationException


@dataclass(frozen=True)
class MatchScore:
    """Weighted compatibility score value object - immutable"""

    value: float

    def __post_init__(self):
        """Validate match score range"""
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise ValidationException("score", "must be a number")

        if not 0 <= self.value <= 100:
            raise ValidationException("score", "must be between 0 and 100")

    def is_good_match(self, threshold: float = 70.0) -> bool:
        """Check if score meets threshold for good match"""
        return self.value >= threshold

    def __float__(self) -> float:
        """Allow conversion to float"""
        return float(self.value)

    def __str__(self) -> str:
        return f"{self.value:.1f}%"

    def __repr__(self) -> str:
        return f"MatchScore({self.value})"


@dataclass(frozen=True)
class MatchCriteria:
    """Per-criterion breakdown behind a match score"""

    skills_match_pct: float = 0.0
    location_match: bool = False
    experience_match: bool = False
    salary_match: bool = False

    def __post_init__(self):
        if not 0 <= self.skills_match_pct <= 100:
            raise ValidationException("skills_match_pct", "must be between 0 and 100")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "skillsMatch": self.skills_match_pct,
            "locationMatch": self.location_match,
            "experienceMatch": self.experience_match,
            "salaryMatch": self.salary_match,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchCriteria":
        return cls(
            skills_match_pct=float(data.get("skillsMatch", 0) or 0),
            location_match=bool(data.get("locationMatch", False)),
            experience_match=bool(data.get("experienceMatch", False)),
            salary_match=bool(data.get("salaryMatch", False)),
        )
