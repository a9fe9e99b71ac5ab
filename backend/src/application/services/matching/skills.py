"""Skill name normalisation shared by filtering and scoring"""
from typing import FrozenSet, Iterable


def normalize_skills(skills: Iterable[str]) -> FrozenSet[str]:
    """Case-fold and trim skill names, dropping blanks"""
    # Deliberately looser than an exact string match: "Python " and "python"
    # count as the same skill in both the filter and the scorer.
    return frozenset(s.strip().lower() for s in skills if s and s.strip())
