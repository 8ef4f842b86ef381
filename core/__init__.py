"""
Asset Intelligence Workbench - Core Market Engine

Deterministic synthetic market data for a subject location:
1. GeoMath (great-circle distance)
2. Seeded generation (reproducible pseudo-random values)
3. Demographics (four fixed rings)
4. Comp Engine (synthesize, filter, rank)
5. Market statistics (vacancy, absorption, rent)
6. Route ranking (dedupe by label, nearest first)

The async request coordinator lives in core.coordinator and is imported
from there, since it depends on the sources package.
"""

from .models import (
    AssetType,
    AssetProfile,
    ASSET_PROFILES,
    Coordinate,
    DemographicRing,
    MarketStats,
    RankedRoute,
    RawRouteSegment,
    Subject,
    get_asset_profile,
)
from .geo import great_circle_distance_miles, meters_to_miles, miles_to_meters
from .seeded import pseudo_random_01, string_seed

# Comp Engine
from .comp_engine import (
    Comp,
    CompSelectionEngine,
    CompSelectionResult,
    FilterCriteria,
    RawCandidatePoint,
    build_comps,
)

from .demographics import generate_demographics
from .market_stats import build_market_stats
from .routes import normalize_route_name, rank_nearby_routes
from .narrative import build_summary

# Market Analyzer - integrated report pipeline
from .analyzer import MarketAnalyzer, MarketReport

__all__ = [
    # Models
    "AssetType",
    "AssetProfile",
    "ASSET_PROFILES",
    "Coordinate",
    "DemographicRing",
    "MarketStats",
    "RankedRoute",
    "RawRouteSegment",
    "Subject",
    "get_asset_profile",
    # GeoMath
    "great_circle_distance_miles",
    "meters_to_miles",
    "miles_to_meters",
    # Seeded generation
    "pseudo_random_01",
    "string_seed",
    # Comp Engine
    "Comp",
    "CompSelectionEngine",
    "CompSelectionResult",
    "FilterCriteria",
    "RawCandidatePoint",
    "build_comps",
    # Engines
    "generate_demographics",
    "build_market_stats",
    "normalize_route_name",
    "rank_nearby_routes",
    "build_summary",
    # Analyzer
    "MarketAnalyzer",
    "MarketReport",
]
