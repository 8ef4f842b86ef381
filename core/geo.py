"""
Distance helpers.

All distances are great-circle distances on a spherical Earth, reported in
statute miles.
"""

import math

from .models import Coordinate


METERS_PER_MILE = 1609.34
EARTH_RADIUS_METERS = 6371e3


def miles_to_meters(miles: float) -> float:
    """Convert statute miles to meters."""
    return miles * METERS_PER_MILE


def meters_to_miles(meters: float) -> float:
    """Convert meters to statute miles."""
    return meters / METERS_PER_MILE


def haversine_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Calculate distance between two points in miles using the Haversine formula.

    Args:
        lat1, lng1: First point coordinates (degrees)
        lat2, lng2: Second point coordinates (degrees)

    Returns:
        Distance in miles
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return meters_to_miles(EARTH_RADIUS_METERS * c)


def great_circle_distance_miles(a: Coordinate, b: Coordinate) -> float:
    """Distance in miles between two coordinates."""
    return haversine_miles(a.latitude, a.longitude, b.latitude, b.longitude)
