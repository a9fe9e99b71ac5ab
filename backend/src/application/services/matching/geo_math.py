"""
Geo Math
Great-circle distance and radius bounding boxes in degree-space
"""
import math

from core.exceptions import ValidationException
from domain.value_objects import GeoPoint, BoundingBox

EARTH_RADIUS_KM = 6371.0

# Queries centred closer to a pole than this are rejected
MAX_QUERY_LATITUDE = 85.0


def haversine_distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in kilometres"""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push h a hair past 1 for antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bounding_box(
    center: GeoPoint,
    radius_km: float,
    max_latitude: float = MAX_QUERY_LATITUDE
) -> BoundingBox:
    """
    Degree-space rectangle containing every point within ``radius_km`` of center.

    The latitude delta is the angular radius ``radius_km / R``. The longitude
    delta is ``asin(sin(radius / R) / cos(lat))``, the exact form of the
    1/cos(lat) correction for meridians converging towards the poles.

    The box never wraps: a latitude bound past a pole is clamped to +-90, and
    when the longitude delta is undefined or the box would cross the
    antimeridian, the longitude span widens to the full [-180, 180]. Both keep
    the box a superset of the circle. Centres beyond ``max_latitude`` are
    rejected outright.

    Raises:
        ValidationException: radius not positive or center too close to a pole
    """
    if radius_km is None or not radius_km > 0:
        raise ValidationException("radius_km", "must be greater than 0")

    if abs(center.latitude) > max_latitude:
        raise ValidationException(
            "latitude",
            f"geo queries are limited to |latitude| <= {max_latitude:g}"
        )

    angular = radius_km / EARTH_RADIUS_KM
    d_lat = math.degrees(angular)

    min_lat = max(-90.0, center.latitude - d_lat)
    max_lat = min(90.0, center.latitude + d_lat)

    ratio = math.sin(min(angular, math.pi / 2)) / math.cos(math.radians(center.latitude))
    reaches_pole = min_lat <= -90.0 or max_lat >= 90.0

    if reaches_pole or angular >= math.pi / 2 or ratio >= 1:
        min_lon, max_lon = -180.0, 180.0
    else:
        d_lon = math.degrees(math.asin(ratio))
        min_lon = center.longitude - d_lon
        max_lon = center.longitude + d_lon
        if min_lon < -180.0 or max_lon > 180.0:
            min_lon, max_lon = -180.0, 180.0

    return BoundingBox(
        low=GeoPoint(min_lat, min_lon),
        high=GeoPoint(max_lat, max_lon),
    )
