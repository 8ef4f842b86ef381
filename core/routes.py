"""
Nearby major route ranking.

Road ways come back from the geospatial service as many short segments of
the same road. Segments are labelled from their ref/name tags, collapsed
to the nearest segment per label, and ranked by distance to the subject.
"""

from typing import Iterable, List, Mapping

from .geo import great_circle_distance_miles
from .models import RankedRoute, RawRouteSegment, Subject


UNNAMED_ROUTE = "Unnamed route"
DEFAULT_ROUTE_RADIUS_MILES = 20
MAX_RANKED_ROUTES = 8


def normalize_route_name(tags: Mapping[str, str]) -> str:
    """
    Build a display label from road tags.

    "I-95 (Capital Beltway)" when both ref and name are tagged, otherwise
    whichever one is present, otherwise UNNAMED_ROUTE.
    """
    ref = (tags.get("ref") or "").strip()
    name = (tags.get("name") or "").strip()
    if ref and name:
        return f"{ref} ({name})"
    return ref or name or UNNAMED_ROUTE


def rank_nearby_routes(
    subject: Subject,
    raw_segments: Iterable[RawRouteSegment],
    radius_miles: float = DEFAULT_ROUTE_RADIUS_MILES,
) -> List[RankedRoute]:
    """
    Deduplicate and rank road segments around a subject.

    Args:
        subject: The property being analysed
        raw_segments: Segments returned for the lookup radius
        radius_miles: Radius the segments were queried with

    Returns:
        Up to 8 routes with unique labels, nearest first
    """
    nearest = {}

    for segment in raw_segments:
        tags = segment.tags or {}
        if segment.center is None or not tags.get("highway"):
            continue

        label = normalize_route_name(tags)
        if label == UNNAMED_ROUTE:
            continue

        distance = great_circle_distance_miles(subject.coordinate, segment.center)
        existing = nearest.get(label)
        if existing is None or distance < existing.distance_miles:
            nearest[label] = RankedRoute(name=label, distance_miles=distance)

    ranked = sorted(nearest.values(), key=lambda r: r.distance_miles)
    return ranked[:MAX_RANKED_ROUTES]
