"""
Comp Engine

Synthesizes comparable properties from raw candidate points, filters them
against the subject, and ranks them by distance.
"""

from .models import (
    Comp,
    CompSelectionResult,
    FilterCriteria,
    RawCandidatePoint,
)
from .filters import CompEligibilityFilter, MAX_COMPS, MAX_COMP_RADIUS_MILES, SIZE_TOLERANCE
from .generator import comp_seed, synthesize_comp
from .selection import CompSelectionEngine, build_comps

__all__ = [
    # Models
    "Comp",
    "CompSelectionResult",
    "FilterCriteria",
    "RawCandidatePoint",
    # Filters
    "CompEligibilityFilter",
    "MAX_COMPS",
    "MAX_COMP_RADIUS_MILES",
    "SIZE_TOLERANCE",
    # Engine
    "comp_seed",
    "synthesize_comp",
    "CompSelectionEngine",
    "build_comps",
]
