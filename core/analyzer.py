"""
Market Analyzer - Integrated Report Pipeline

Runs every engine for one subject and assembles the market report:
demographics and comps independently, market statistics from the comp
pass, routes from the road segments, then the narrative summary.

Pure and synchronous; all I/O happens in the caller.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .comp_engine import CompSelectionEngine, CompSelectionResult, FilterCriteria, RawCandidatePoint
from .comp_engine.models import Comp
from .demographics import generate_demographics
from .market_stats import build_market_stats
from .models import DemographicRing, MarketStats, RankedRoute, RawRouteSegment, Subject, get_asset_profile
from .narrative import build_summary
from .routes import DEFAULT_ROUTE_RADIUS_MILES, rank_nearby_routes


@dataclass
class MarketReport:
    """
    Complete market report for one subject.

    routes_available is False when the road lookup failed; routes is then
    empty and the presentation layer shows an unavailable state.
    """
    subject: Subject
    subject_sf: float
    filters: FilterCriteria
    demographics: Tuple[DemographicRing, ...]
    selection: CompSelectionResult
    market_stats: MarketStats
    routes: List[RankedRoute] = field(default_factory=list)
    routes_available: bool = True
    summary: List[str] = field(default_factory=list)

    @property
    def comps(self) -> List[Comp]:
        return self.selection.comps

    @property
    def rent_unit(self) -> str:
        return get_asset_profile(self.subject.asset_type).rent_unit

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "subject": {
                "lat": self.subject.latitude,
                "lng": self.subject.longitude,
                "display_name": self.subject.display_name,
                "asset_type": self.subject.asset_type.value,
                "square_feet": self.subject_sf,
            },
            "filters": {
                "min_clear_height": self.filters.min_clear_height,
                "year_built_min": self.filters.year_built_min,
                "year_built_max": self.filters.year_built_max,
            },
            "demographics": [ring.to_dict() for ring in self.demographics],
            "comps": [comp.to_dict() for comp in self.comps],
            "comp_selection": {
                **self.selection.stage_counts(),
                "truncated": self.selection.truncated,
            },
            "market_stats": {**self.market_stats.to_dict(), "rent_unit": self.rent_unit},
            "routes": [route.to_dict() for route in self.routes],
            "routes_available": self.routes_available,
            "summary": list(self.summary),
        }


class MarketAnalyzer:
    """
    Assembles market reports from already-fetched inputs.

    Usage:
        analyzer = MarketAnalyzer()
        report = analyzer.analyze(subject, 50000, filters, points, segments)
    """

    def __init__(self, route_radius_miles: float = DEFAULT_ROUTE_RADIUS_MILES):
        self._route_radius_miles = route_radius_miles
        self._comp_engine = CompSelectionEngine()

    def analyze(
        self,
        subject: Subject,
        subject_sf: float,
        filters: FilterCriteria,
        raw_points: Sequence[RawCandidatePoint],
        raw_segments: Optional[Sequence[RawRouteSegment]] = None,
    ) -> MarketReport:
        """
        Build the full report.

        Args:
            subject: Resolved subject, carrying the asset type
            subject_sf: Subject size in square feet
            filters: Comp constraints
            raw_points: Candidate dataset
            raw_segments: Road segments, or None when the lookup failed

        Returns:
            MarketReport
        """
        asset_type = subject.asset_type

        demographics = generate_demographics(subject, asset_type)
        selection = self._comp_engine.select(subject, asset_type, subject_sf, filters, raw_points)
        market_stats = build_market_stats(selection.comps, asset_type)

        routes_available = raw_segments is not None
        routes = (
            rank_nearby_routes(subject, raw_segments, self._route_radius_miles)
            if routes_available else []
        )

        summary = build_summary(
            display_name=subject.display_name,
            asset_type=asset_type,
            subject_sf=subject_sf,
            demographics=demographics,
            comps=selection.comps,
            market_stats=market_stats,
            routes=routes,
        )

        return MarketReport(
            subject=subject,
            subject_sf=subject_sf,
            filters=filters,
            demographics=demographics,
            selection=selection,
            market_stats=market_stats,
            routes=routes,
            routes_available=routes_available,
            summary=summary,
        )
