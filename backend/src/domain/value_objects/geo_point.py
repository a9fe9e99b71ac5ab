"""
Geo Value Objects
Immutable coordinates and degree-space bounding boxes
"""
from dataclasses import dataclass
from typing import Any, Dict

from core.exceptions import ValidationException


@dataclass(frozen=True, order=True)
class GeoPoint:
    """
    Latitude/longitude pair in degrees.

    Ordering is lexicographic (latitude, then longitude), the same ordering a
    document store applies when range-querying a composite location field.
    """

    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate coordinate ranges"""
        for name in ("latitude", "longitude"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationException(name, "must be a number")
            if value != value:
                raise ValidationException(name, "must not be NaN")

        if not -90 <= self.latitude <= 90:
            raise ValidationException("latitude", f"{self.latitude} outside [-90, 90]")

        if not -180 <= self.longitude <= 180:
            raise ValidationException("longitude", f"{self.longitude} outside [-180, 180]")

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": float(self.latitude), "longitude": float(self.longitude)}

    @classmethod
    def from_dict(cls, data: Any) -> "GeoPoint":
        """Accept a GeoPoint, a {latitude, longitude} mapping or a (lat, lng) pair"""
        if isinstance(data, GeoPoint):
            return data
        if isinstance(data, dict):
            try:
                return cls(data["latitude"], data["longitude"])
            except KeyError as e:
                raise ValidationException("location", f"missing {e.args[0]}")
        if isinstance(data, (tuple, list)) and len(data) == 2:
            return cls(data[0], data[1])
        raise ValidationException("location", f"cannot read coordinates from {data!r}")

    def __str__(self) -> str:
        return f"({self.latitude:.5f}, {self.longitude:.5f})"


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle in degree-space; low holds the minimum corner"""

    low: GeoPoint
    high: GeoPoint

    def __post_init__(self):
        if self.low.latitude > self.high.latitude:
            raise ValidationException("low", "latitude must not exceed high latitude")

    def contains(self, point: GeoPoint) -> bool:
        """Check if point lies inside the box (edges inclusive)"""
        return (
            self.low.latitude <= point.latitude <= self.high.latitude
            and self.low.longitude <= point.longitude <= self.high.longitude
        )

    @property
    def spans_all_longitudes(self) -> bool:
        return self.low.longitude <= -180 and self.high.longitude >= 180

    def __str__(self) -> str:
        return f"BoundingBox({self.low} .. {self.high})"
