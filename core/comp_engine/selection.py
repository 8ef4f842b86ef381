"""
Selection Engine for the Comp Engine

Pipeline order:
1. SYNTHESIZE - Generate a comp for every candidate point
2. FILTER - Radius and size, clear height, year built
3. RANK - Stable sort by distance, keep the nearest 40
"""

import logging
from typing import Sequence

from ..models import AssetType, Subject
from .filters import MAX_COMPS, CompEligibilityFilter, rank_by_distance
from .generator import synthesize_comp
from .models import Comp, CompSelectionResult, FilterCriteria, RawCandidatePoint


logger = logging.getLogger(__name__)


class CompSelectionEngine:
    """
    Complete comp selection for one subject.

    Stateless apart from its inputs; safe to share across requests.
    """

    def __init__(self, max_comps: int = MAX_COMPS):
        self._max_comps = max_comps

    def select(
        self,
        subject: Subject,
        asset_type: AssetType,
        subject_sf: float,
        criteria: FilterCriteria,
        raw_points: Sequence[RawCandidatePoint],
    ) -> CompSelectionResult:
        """
        Run the full selection pipeline.

        Args:
            subject: The property being analysed
            asset_type: Asset type of the generated comps
            subject_sf: Subject size, for the size band
            criteria: Clear height and year built constraints
            raw_points: Candidate locations

        Returns:
            CompSelectionResult with ranked comps and per-stage counts
        """
        candidates = [
            synthesize_comp(i, point, subject.coordinate, asset_type)
            for i, point in enumerate(raw_points)
        ]

        eligibility = CompEligibilityFilter(subject_sf, criteria)
        nearby = eligibility.filter_by_radius_and_size(candidates)
        tall_enough = eligibility.filter_by_clear_height(nearby)
        in_vintage = eligibility.filter_by_year_built(tall_enough)

        comps = rank_by_distance(in_vintage, self._max_comps)

        logger.debug(
            "Comp selection for %s: %d candidates, %d near, %d clear height, %d vintage, %d kept",
            asset_type.value,
            len(candidates),
            len(nearby),
            len(tall_enough),
            len(in_vintage),
            len(comps),
        )

        return CompSelectionResult(
            comps=comps,
            candidate_count=len(candidates),
            within_radius_and_size=len(nearby),
            after_clear_height=len(tall_enough),
            after_year_built=len(in_vintage),
            truncated=len(in_vintage) > len(comps),
        )


def build_comps(
    subject: Subject,
    asset_type: AssetType,
    subject_sf: float,
    filters: FilterCriteria,
    raw_points: Sequence[RawCandidatePoint],
) -> list:
    """
    Build the ranked comp list for a subject.

    Returns at most 40 comps, ascending by distance. Empty input or a
    fully filtered set returns an empty list.
    """
    return CompSelectionEngine().select(subject, asset_type, subject_sf, filters, raw_points).comps
