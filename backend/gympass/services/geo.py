"""
GymPass Backend — Geo Distance
===============================

Great-circle distance between two latitude/longitude points (haversine,
mean Earth radius 6371 km). Inputs are decimal degrees and are assumed to be
range-checked by the request schemas.
"""

from dataclasses import dataclass
from math import asin, cos, degrees, radians, sin, sqrt

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


def get_distance_between_coordinates(origin: Coordinate, destination: Coordinate) -> float:
    """Return the haversine distance in kilometers between two coordinates."""
    if origin == destination:
        return 0.0

    lat1 = radians(origin.latitude)
    lat2 = radians(destination.latitude)
    dlat = lat2 - lat1
    dlon = radians(destination.longitude - origin.longitude)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points
    return 2 * EARTH_RADIUS_KM * asin(sqrt(min(1.0, h)))


def bounding_box(center: Coordinate, radius_km: float) -> tuple:
    """
    Latitude/longitude bounds that fully contain a circle of `radius_km`.

    Returns (min_lat, max_lat, min_lon, max_lon). Used to pre-filter rows in
    SQL before the exact haversine check. Near the poles the longitude span
    covers the whole globe, as it does when the box crosses the antimeridian.
    """
    dlat = degrees(radius_km / EARTH_RADIUS_KM)
    min_lat = max(-90.0, center.latitude - dlat)
    max_lat = min(90.0, center.latitude + dlat)

    cos_lat = cos(radians(center.latitude))
    if cos_lat < 1e-6 or max_lat >= 90.0 or min_lat <= -90.0:
        return min_lat, max_lat, -180.0, 180.0

    # Widest longitude reached by the circle, exact on the sphere
    ratio = sin(radius_km / EARTH_RADIUS_KM) / cos_lat
    if ratio >= 1.0:
        return min_lat, max_lat, -180.0, 180.0
    dlon = degrees(asin(ratio))
    min_lon = center.longitude - dlon
    max_lon = center.longitude + dlon
    if min_lon < -180.0 or max_lon > 180.0:
        return min_lat, max_lat, -180.0, 180.0
    return min_lat, max_lat, min_lon, max_lon
