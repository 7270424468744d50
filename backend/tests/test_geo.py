"""
GymPass Backend — Geo Helper Unit Tests
========================================

What we test:
    ✅ Identical coordinates are exactly 0 km apart
    ✅ Known distances on the R = 6371 km sphere
    ✅ Distance is symmetric
    ✅ The bounding box contains every point of the search circle
    ✅ Near the antimeridian the box spans all longitudes
    ✅ Close to the poles the box still covers the whole circle
"""

import math

import pytest

from gympass.services.geo import (
    EARTH_RADIUS_KM,
    Coordinate,
    bounding_box,
    get_distance_between_coordinates,
)

KM_PER_DEGREE = math.pi * EARTH_RADIUS_KM / 180  # ≈ 111.195 km


class TestDistance:

    def test_identical_points_are_zero(self):
        point = Coordinate(-27.2092052, -49.6401091)
        assert get_distance_between_coordinates(point, point) == 0.0

    def test_one_degree_along_the_equator(self):
        distance = get_distance_between_coordinates(Coordinate(0, 0), Coordinate(0, 1))
        assert distance == pytest.approx(KM_PER_DEGREE, rel=1e-9)

    def test_one_degree_along_a_meridian(self):
        distance = get_distance_between_coordinates(Coordinate(10, 20), Coordinate(11, 20))
        assert distance == pytest.approx(KM_PER_DEGREE, rel=1e-9)

    def test_antipodal_points(self):
        distance = get_distance_between_coordinates(Coordinate(0, 0), Coordinate(0, 180))
        assert distance == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)

    def test_symmetric(self):
        a = Coordinate(-27.2092052, -49.6401091)
        b = Coordinate(-27.0610928, -49.5229501)
        assert get_distance_between_coordinates(a, b) == pytest.approx(
            get_distance_between_coordinates(b, a)
        )


class TestBoundingBox:

    @pytest.mark.parametrize("center", [
        Coordinate(-27.2092052, -49.6401091),
        Coordinate(60.0, 10.0),
        Coordinate(0.0, 0.0),
        Coordinate(89.9, 0.0),
        Coordinate(-89.5, 120.0),
    ])
    def test_contains_circle(self, center):
        radius_km = 10.0
        min_lat, max_lat, min_lon, max_lon = bounding_box(center, radius_km)

        # Sample points on the circle's edge, slightly inside
        for step in range(36):
            bearing = math.radians(step * 10)
            d = (radius_km * 0.999) / EARTH_RADIUS_KM
            lat1 = math.radians(center.latitude)
            lon1 = math.radians(center.longitude)
            lat2 = math.asin(
                math.sin(lat1) * math.cos(d)
                + math.cos(lat1) * math.sin(d) * math.cos(bearing)
            )
            lon2 = lon1 + math.atan2(
                math.sin(bearing) * math.sin(d) * math.cos(lat1),
                math.cos(d) - math.sin(lat1) * math.sin(lat2),
            )
            lat, lon = math.degrees(lat2), math.degrees(lon2)

            assert min_lat <= lat <= max_lat
            assert min_lon <= lon <= max_lon

    def test_antimeridian_spans_all_longitudes(self):
        _, _, min_lon, max_lon = bounding_box(Coordinate(0.0, 179.99), 10.0)
        assert (min_lon, max_lon) == (-180.0, 180.0)

    def test_pole_spans_all_longitudes(self):
        min_lat, max_lat, min_lon, max_lon = bounding_box(Coordinate(89.99, 0.0), 10.0)
        assert max_lat == 90.0
        assert (min_lon, max_lon) == (-180.0, 180.0)
