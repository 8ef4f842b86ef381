"""
Base interfaces for external data sources.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from core.models import Coordinate, RawRouteSegment


@dataclass(frozen=True)
class GeocodeResult:
    """A resolved address."""
    coordinate: Coordinate
    display_name: str


class BaseGeocoder(ABC):
    """Abstract base class for address resolution services."""

    name: str = "geocoder"

    @abstractmethod
    def geocode(self, address: str) -> GeocodeResult:
        """
        Resolve an address to coordinates.

        Args:
            address: Free-form street address

        Returns:
            GeocodeResult for the best match.

        Raises:
            GeocodingError: If the address cannot be resolved.
        """
        pass

    def close(self) -> None:
        """Release any held connections."""


class BaseRouteSource(ABC):
    """Abstract base class for road segment lookups."""

    @abstractmethod
    def fetch_segments(self, center: Coordinate, radius_miles: float) -> List[RawRouteSegment]:
        """
        Fetch major road segments around a point.

        Args:
            center: Point to search around
            radius_miles: Search radius

        Returns:
            Raw segments, possibly empty.

        Raises:
            RouteLookupError: On transport or response errors.
        """
        pass

    def close(self) -> None:
        """Release any held connections."""
