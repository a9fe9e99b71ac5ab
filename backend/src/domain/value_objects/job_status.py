"""
Status Enums
Status enumerations for job postings and matches
"""
from enum import Enum
from typing import Dict, FrozenSet


class JobStatus(str, Enum):
    """Job posting status"""
    ACTIVE = "active"
    CLOSED = "closed"


class MatchStatus(str, Enum):
    """Match lifecycle status"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    def can_transition_to(self, target: "MatchStatus") -> bool:
        """Check whether a status change is allowed"""
        return target in MATCH_TRANSITIONS[self]


# pending -> {accepted, rejected}; terminal states have no exits
MATCH_TRANSITIONS: Dict[MatchStatus, FrozenSet[MatchStatus]] = {
    MatchStatus.PENDING: frozenset({MatchStatus.ACCEPTED, MatchStatus.REJECTED}),
    MatchStatus.ACCEPTED: frozenset(),
    MatchStatus.REJECTED: frozenset(),
}
