"""
Matching Service Package
"""
from .geo_math import haversine_distance_km, bounding_box, EARTH_RADIUS_KM
from .bounding_box_search import BoundingBoxSearch
from .criteria_filter import filter_records, matches_filters
from .match_scorer import ScoreResult, score
from .match_service import MatchService

__all__ = [
    "haversine_distance_km",
    "bounding_box",
    "EARTH_RADIUS_KM",
    "BoundingBoxSearch",
    "filter_records",
    "matches_filters",
    "ScoreResult",
    "score",
    "MatchService",
]
