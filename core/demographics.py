"""
Ring demographics for the subject trade area.

Produces modelled population, household and income estimates for four
fixed rings around the subject. Figures are synthetic and reproducible:
the noise for every ring comes from a seed over the subject coordinates
and asset type.
"""

import math
from typing import List, Tuple

from .models import AssetType, DemographicRing, Subject
from .seeded import coordinate_key, pseudo_random_01, round_half_up, string_seed


# (label, radius in miles), in report order
RING_PROFILES: List[Tuple[str, float]] = [
    ("2-mile radius", 2),
    ("5-mile radius", 5),
    ("10-mile radius", 10),
    ("20-minute drive-time proxy", 11.7),
]

RING_SEED_STRIDE = 11
PERSONS_PER_HOUSEHOLD = 2.35


def demographics_seed(subject: Subject, asset_type: AssetType) -> int:
    """Base seed for a subject location and asset type."""
    return string_seed(
        f"{coordinate_key(subject.latitude)}|{coordinate_key(subject.longitude)}|{asset_type.value}"
    )


def generate_demographics(subject: Subject, asset_type: AssetType) -> Tuple[DemographicRing, ...]:
    """
    Generate the four demographic rings for a subject.

    Args:
        subject: The resolved subject location
        asset_type: Asset type being analysed (part of the seed)

    Returns:
        Rings in fixed order: 2 mi, 5 mi, 10 mi, drive-time proxy
    """
    base_seed = demographics_seed(subject, asset_type)
    rings = []

    for i, (label, miles) in enumerate(RING_PROFILES):
        noise = pseudo_random_01(base_seed + i * RING_SEED_STRIDE)
        area = math.pi * miles * miles
        density = round_half_up(2800 + noise * 4200 - miles * 45)
        households = round_half_up(area * (density / PERSONS_PER_HOUSEHOLD))
        median_income = round_half_up(62000 + noise * 70000 + miles * 1500)
        average_income = round_half_up(median_income * (1.18 + noise * 0.14))

        rings.append(DemographicRing(
            label=label,
            radius_miles=miles,
            population_density=density,
            median_income=median_income,
            average_income=average_income,
            households=households,
        ))

    return tuple(rings)


def find_ring(rings, radius_miles: float):
    """Return the ring with the given radius, or None."""
    for ring in rings:
        if ring.radius_miles == radius_miles:
            return ring
    return None
