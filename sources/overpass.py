"""
Major road lookup via the Overpass API.

Queries motorway, trunk and primary ways within a radius of the subject and
returns each way as a raw segment (tags plus center point). Ranking happens
in core.routes.
"""

import logging
from typing import List, Optional

import requests

from core.geo import miles_to_meters
from core.seeded import round_half_up
from core.models import Coordinate, RawRouteSegment

from .base import BaseRouteSource
from .geocoding import REQUEST_TIMEOUT_SECONDS, USER_AGENT


logger = logging.getLogger(__name__)


OVERPASS_INTERPRETER_URL = "https://overpass-api.de/api/interpreter"
HIGHWAY_CLASSES = "motorway|trunk|primary"
QUERY_TIMEOUT_SECONDS = 25


class RouteLookupError(RuntimeError):
    """Raised when the road segment lookup fails."""


def build_route_query(center: Coordinate, radius_miles: float) -> str:
    """Overpass QL for major ways around a point, with way centers."""
    radius_meters = round_half_up(miles_to_meters(radius_miles))
    return (
        f"[out:json][timeout:{QUERY_TIMEOUT_SECONDS}];\n"
        "(\n"
        f"  way(around:{radius_meters},{center.latitude},{center.longitude})"
        f'[highway~"{HIGHWAY_CLASSES}"];\n'
        ");\n"
        "out tags center;"
    )


def _parse_center(raw) -> Optional[Coordinate]:
    if not isinstance(raw, dict):
        return None
    try:
        return Coordinate(float(raw["lat"]), float(raw["lon"]))
    except (KeyError, TypeError, ValueError):
        return None


def parse_route_elements(payload) -> List[RawRouteSegment]:
    """
    Convert an Overpass JSON payload into raw segments.

    A payload without an `elements` list yields no segments. Elements
    with a missing or malformed center keep `center=None` and are dropped
    later by the ranker.
    """
    elements = payload.get("elements") if isinstance(payload, dict) else None
    if not isinstance(elements, list):
        return []

    segments = []
    for element in elements:
        if not isinstance(element, dict):
            continue
        tags = element.get("tags")
        segments.append(RawRouteSegment(
            tags={k: v for k, v in tags.items() if isinstance(v, str)} if isinstance(tags, dict) else {},
            center=_parse_center(element.get("center")),
        ))
    return segments


class OverpassRouteSource(BaseRouteSource):
    """Fetches major road segments from an Overpass interpreter."""

    def __init__(
        self,
        url: str = OVERPASS_INTERPRETER_URL,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        user_agent: str = USER_AGENT,
    ):
        self._url = url
        self._timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": user_agent})
        self._session = session

    def fetch_segments(self, center: Coordinate, radius_miles: float) -> List[RawRouteSegment]:
        query = build_route_query(center, radius_miles)
        try:
            response = self._session.post(
                self._url,
                data={"data": query},
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise RouteLookupError(f"Route lookup failed: {e}") from e

        if not response.ok:
            raise RouteLookupError(f"Route lookup failed ({response.status_code})")

        try:
            payload = response.json()
        except ValueError as e:
            raise RouteLookupError("Route lookup returned invalid JSON") from e

        segments = parse_route_elements(payload)
        logger.debug("Overpass returned %d segments within %s mi", len(segments), radius_miles)
        return segments

    def close(self) -> None:
        """Close the session."""
        self._session.close()
