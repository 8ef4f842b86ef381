"""
Data models for the Comp Engine.

Defines raw candidate points, synthesized comparable properties, filter
criteria and the result of a selection pass.
"""

from dataclasses import dataclass, field
from typing import List, Mapping

from ..models import AssetType, Coordinate


@dataclass(frozen=True)
class RawCandidatePoint:
    """
    An unlabeled location from the candidate dataset.

    The only real input to comp synthesis; every other attribute of a comp
    is generated from its index.
    """
    latitude: float
    longitude: float

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    @classmethod
    def from_mapping(cls, data: Mapping) -> "RawCandidatePoint":
        """Build from a dataset record with `lat` and `lng` keys."""
        return cls(latitude=float(data["lat"]), longitude=float(data["lng"]))


@dataclass(frozen=True)
class FilterCriteria:
    """
    Caller-supplied comp constraints.

    No defaults; the caller validates ranges before building the engine
    input.
    """
    min_clear_height: float
    year_built_min: int
    year_built_max: int


@dataclass(frozen=True)
class Comp:
    """
    A synthetic comparable property.

    Fully determined by (index, asset type) plus the candidate point's
    location. distance_miles is computed once against the subject.
    """
    comp_id: int
    name: str
    coordinate: Coordinate
    asset_type: AssetType
    distance_miles: float
    square_feet: int
    clear_height: int  # feet
    year_built: int
    ask_rent: float

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "id": self.comp_id,
            "name": self.name,
            "lat": self.latitude,
            "lng": self.longitude,
            "type": self.asset_type.value,
            "distance": self.distance_miles,
            "sf": self.square_feet,
            "clear_height": self.clear_height,
            "year_built": self.year_built,
            "ask_rent": self.ask_rent,
        }


@dataclass
class CompSelectionResult:
    """
    Result of one comp selection pass.

    Stage counts record how many candidates survived each filter, in
    pipeline order.
    """
    comps: List[Comp]
    candidate_count: int = 0
    within_radius_and_size: int = 0
    after_clear_height: int = 0
    after_year_built: int = 0
    truncated: bool = False

    @property
    def comp_count(self) -> int:
        """Number of comps after filtering and truncation."""
        return len(self.comps)

    @property
    def is_empty(self) -> bool:
        return not self.comps

    def stage_counts(self) -> dict:
        return {
            "candidates": self.candidate_count,
            "within_radius_and_size": self.within_radius_and_size,
            "after_clear_height": self.after_clear_height,
            "after_year_built": self.after_year_built,
        }
