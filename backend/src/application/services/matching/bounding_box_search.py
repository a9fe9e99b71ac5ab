"""
Bounding Box Search
Proximity lookups over a document collection's composite location field
"""
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from application.repositories.interfaces import IDocumentStore
from core.exceptions import ValidationException
from domain.value_objects import GeoPoint, BoundingBox
from .geo_math import bounding_box, haversine_distance_km, MAX_QUERY_LATITUDE

LOCATION_FIELD = "location"

# The range query orders (latitude, longitude) lexicographically, so rows in the
# latitude band but outside the longitude band come back too and are dropped
# afterwards. Fetch extra rows to leave room for them.
RANGE_OVERFETCH = 4


class BoundingBoxSearch:
    """Radius search: coarse box query, optional exact haversine post-filter"""

    def __init__(
        self,
        store: IDocumentStore,
        max_latitude: float = MAX_QUERY_LATITUDE,
        location_field: str = LOCATION_FIELD
    ):
        self.store = store
        self.max_latitude = max_latitude
        self.location_field = location_field

    def _location_of(self, record: Dict[str, Any]) -> Optional[GeoPoint]:
        raw = record.get(self.location_field)
        if raw is None:
            return None
        try:
            return GeoPoint.from_dict(raw)
        except ValidationException:
            logger.warning(f"Skipping record {record.get('id')} with invalid location: {raw!r}")
            return None

    async def _candidates(
        self,
        collection: str,
        center: GeoPoint,
        radius_km: float,
        limit: int
    ) -> Tuple[BoundingBox, List[Tuple[Dict[str, Any], GeoPoint]]]:
        if limit is None or limit <= 0:
            raise ValidationException("limit", "must be greater than 0")

        box = bounding_box(center, radius_km, self.max_latitude)
        fetch_limit = limit if box.spans_all_longitudes else limit * RANGE_OVERFETCH

        records = await self.store.query_range(
            collection, self.location_field, box.low, box.high, fetch_limit
        )

        candidates = []
        for record in records:
            point = self._location_of(record)
            if point is not None and box.contains(point):
                candidates.append((record, point))

        logger.debug(
            f"{collection}: {len(records)} rows in range, {len(candidates)} inside {box}"
        )
        return box, candidates

    async def find_nearby(
        self,
        collection: str,
        center: GeoPoint,
        radius_km: float,
        limit: int = 10
    ) -> List[Dict[str, Any]]:
        """
        Records whose location lies inside the bounding box of the radius.

        Over-inclusive: corners of the box lie farther than
        ``radius_km`` from center. Use find_nearby_exact for true membership.
        """
        _, candidates = await self._candidates(collection, center, radius_km, limit)
        return [record for record, _ in candidates[:limit]]

    async def find_nearby_exact(
        self,
        collection: str,
        center: GeoPoint,
        radius_km: float,
        limit: int = 10
    ) -> List[Dict[str, Any]]:
        """Box search followed by a haversine filter, nearest first"""
        _, candidates = await self._candidates(collection, center, radius_km, limit)

        within = []
        for record, point in candidates:
            distance = haversine_distance_km(center, point)
            if distance <= radius_km:
                within.append((distance, record))

        within.sort(key=lambda item: item[0])
        return [record for _, record in within[:limit]]
