"""
Tests for great-circle distance helpers.
"""

import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.geo import (
    METERS_PER_MILE,
    great_circle_distance_miles,
    haversine_miles,
    meters_to_miles,
    miles_to_meters,
)
from core.models import Coordinate


class TestUnitConversion:
    """Tests for mile/meter conversion."""

    def test_miles_to_meters(self):
        assert miles_to_meters(1) == METERS_PER_MILE
        assert miles_to_meters(20) == pytest.approx(32186.8)

    def test_meters_to_miles(self):
        assert meters_to_miles(1609.34) == pytest.approx(1.0)

    def test_round_trip(self):
        assert meters_to_miles(miles_to_meters(11.7)) == pytest.approx(11.7)

    def test_zero(self):
        assert miles_to_meters(0) == 0
        assert meters_to_miles(0) == 0


class TestGreatCircleDistance:
    """Tests for haversine distance in miles."""

    def test_same_point_is_zero(self):
        point = Coordinate(38.9, -77.1)
        assert great_circle_distance_miles(point, point) == 0

    def test_symmetric(self):
        a = Coordinate(38.9, -77.1)
        b = Coordinate(38.91, -77.09)
        assert great_circle_distance_miles(a, b) == great_circle_distance_miles(b, a)

    def test_one_degree_of_longitude_at_equator(self):
        # 6371 km * pi / 180 = 111.195 km
        assert haversine_miles(0, 0, 0, 1) == pytest.approx(69.093, abs=0.01)

    def test_short_distance(self):
        a = Coordinate(38.9, -77.1)
        b = Coordinate(38.91, -77.09)
        assert great_circle_distance_miles(a, b) == pytest.approx(0.8755, abs=0.002)

    def test_antipodal_points(self):
        # Half the circumference: pi * 6371 km
        assert haversine_miles(0, 0, 0, 180) == pytest.approx(12436.8, abs=1)

    def test_coordinate_wrapper_matches_haversine(self):
        a = Coordinate(40.7128, -74.0060)
        b = Coordinate(38.9072, -77.0369)
        assert great_circle_distance_miles(a, b) == haversine_miles(
            a.latitude, a.longitude, b.latitude, b.longitude
        )

    def test_new_york_to_washington(self):
        a = Coordinate(40.7128, -74.0060)
        b = Coordinate(38.9072, -77.0369)
        assert great_circle_distance_miles(a, b) == pytest.approx(203.6, abs=1.5)
