"""
External data sources feeding the market analysis engine.

Available sources:
- NominatimGeocoder / PhotonGeocoder: address resolution, composed by
  FallbackGeocoder
- OverpassRouteSource: major road segments around a point
- HeatmapDataset: static candidate point dataset, loaded once per process
"""

from .base import BaseGeocoder, BaseRouteSource, GeocodeResult
from .geocoding import (
    FallbackGeocoder,
    GeocodingError,
    NominatimGeocoder,
    PhotonGeocoder,
    create_default_geocoder,
)
from .heatmap import DatasetError, HeatmapDataset, get_heatmap_dataset
from .overpass import OverpassRouteSource, RouteLookupError, build_route_query, parse_route_elements

__all__ = [
    "BaseGeocoder",
    "BaseRouteSource",
    "GeocodeResult",
    "FallbackGeocoder",
    "GeocodingError",
    "NominatimGeocoder",
    "PhotonGeocoder",
    "create_default_geocoder",
    "DatasetError",
    "HeatmapDataset",
    "get_heatmap_dataset",
    "OverpassRouteSource",
    "RouteLookupError",
    "build_route_query",
    "parse_route_elements",
]
