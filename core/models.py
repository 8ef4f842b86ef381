"""
Data models for the market analysis engine.

Subjects, asset profiles, demographic rings, market statistics and
road segments shared by every engine. Comparable property models live in
core.comp_engine.models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional


class AssetType(Enum):
    """
    Commercial asset classification.

    The value doubles as the display label and as part of the generator
    seed, so it must never change.
    """
    INDUSTRIAL = "Industrial"
    OFFICE = "Office"
    RETAIL = "Retail"
    MULTIFAMILY = "Multifamily"

    @classmethod
    def from_string(cls, value: str) -> Optional["AssetType"]:
        """Convert string to AssetType, case-insensitive."""
        normalised = value.strip().lower()
        for member in cls:
            if member.value.lower() == normalised:
                return member
        return None


@dataclass(frozen=True)
class Coordinate:
    """A resolved point in decimal degrees."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Subject:
    """
    The property being analysed.

    Created once per analysis request from the geocoder result.
    """
    coordinate: Coordinate
    display_name: str
    asset_type: AssetType

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude


@dataclass(frozen=True)
class AssetProfile:
    """Baseline market constants for one asset type."""
    vacancy_base: float
    rent_base: float
    absorption_factor: float
    rent_unit: str = "$/SF/yr"


ASSET_PROFILES: Dict[AssetType, AssetProfile] = {
    AssetType.INDUSTRIAL: AssetProfile(vacancy_base=0.051, rent_base=13.2, absorption_factor=1.18),
    AssetType.OFFICE: AssetProfile(vacancy_base=0.173, rent_base=34.5, absorption_factor=0.85),
    AssetType.RETAIL: AssetProfile(vacancy_base=0.091, rent_base=27.9, absorption_factor=0.92),
    AssetType.MULTIFAMILY: AssetProfile(
        vacancy_base=0.064, rent_base=2.45, absorption_factor=1.08, rent_unit="$/SF/mo"
    ),
}


def get_asset_profile(asset_type: AssetType) -> AssetProfile:
    """Look up the baseline profile for an asset type."""
    return ASSET_PROFILES[asset_type]


@dataclass(frozen=True)
class DemographicRing:
    """Modelled demographics for one ring around the subject."""
    label: str
    radius_miles: float
    population_density: int  # people per square mile
    median_income: int
    average_income: int
    households: int

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "ring": self.label,
            "radius_miles": self.radius_miles,
            "population_density": self.population_density,
            "median_income": self.median_income,
            "average_income": self.average_income,
            "households": self.households,
        }


@dataclass(frozen=True)
class MarketStats:
    """Aggregate market estimates derived from one filtered comp set."""
    vacancy_rate: float
    net_absorption: int  # SF over trailing 12 months
    avg_asking_rent: float

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "vacancy_rate": self.vacancy_rate,
            "net_absorption": self.net_absorption,
            "avg_asking_rent": self.avg_asking_rent,
        }


@dataclass(frozen=True)
class RawRouteSegment:
    """
    A road way as returned by the geospatial query service.

    Tags and center are both optional on the wire.
    """
    tags: Mapping[str, str] = field(default_factory=dict)
    center: Optional[Coordinate] = None


@dataclass(frozen=True)
class RankedRoute:
    """A named route and its distance from the subject."""
    name: str
    distance_miles: float

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "name": self.name,
            "distance_miles": self.distance_miles,
        }
