"""
Comp Eligibility Filters for the Comp Engine

Implements hard filters for comparable property selection, applied in
this order:
- Geographic radius (5 miles) and size band (50%-150% of subject SF)
- Minimum clear height
- Year built window
"""

from typing import List

from .models import Comp, FilterCriteria


# =============================================================================
# Configuration Constants
# =============================================================================

MAX_COMP_RADIUS_MILES = 5.0

# Comps must fall within subject SF * (1 -/+ tolerance)
SIZE_TOLERANCE = 0.5

MAX_COMPS = 40


class CompEligibilityFilter:
    """
    Applies hard filters to synthesized comps.

    A comp must pass ALL filters to qualify. Each stage is exposed on its
    own so callers can report how many candidates each one removed.
    """

    def __init__(self, subject_sf: float, criteria: FilterCriteria):
        """
        Args:
            subject_sf: Subject building size in square feet
            criteria: Caller-supplied clear height and year constraints
        """
        self._min_sf = subject_sf * (1 - SIZE_TOLERANCE)
        self._max_sf = subject_sf * (1 + SIZE_TOLERANCE)
        self._criteria = criteria

    @property
    def size_band(self) -> tuple:
        """Inclusive (min, max) square footage."""
        return self._min_sf, self._max_sf

    def filter_by_radius_and_size(self, comps: List[Comp]) -> List[Comp]:
        """Keep comps within the radius and the size band."""
        return [
            c for c in comps
            if c.distance_miles <= MAX_COMP_RADIUS_MILES
            and self._min_sf <= c.square_feet <= self._max_sf
        ]

    def filter_by_clear_height(self, comps: List[Comp]) -> List[Comp]:
        """Keep comps meeting the minimum clear height."""
        return [c for c in comps if c.clear_height >= self._criteria.min_clear_height]

    def filter_by_year_built(self, comps: List[Comp]) -> List[Comp]:
        """Keep comps built inside the year window, inclusive."""
        return [
            c for c in comps
            if self._criteria.year_built_min <= c.year_built <= self._criteria.year_built_max
        ]


def rank_by_distance(comps: List[Comp], limit: int = MAX_COMPS) -> List[Comp]:
    """
    Sort ascending by distance and keep the nearest `limit`.

    sorted() is stable, so equal distances keep candidate index order.
    """
    return sorted(comps, key=lambda c: c.distance_miles)[:limit]
