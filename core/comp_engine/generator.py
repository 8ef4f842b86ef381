"""
Comp synthesis.

Turns a raw candidate point into a Comp. Attributes are seeded purely by
(index, asset type) so a candidate keeps the same profile across requests;
only the distance depends on the subject.
"""

from ..geo import great_circle_distance_miles
from ..models import AssetType, Coordinate, get_asset_profile
from ..seeded import pseudo_random_01, round_half_up, round_to, string_seed
from .models import Comp, RawCandidatePoint


# Offsets giving each attribute its own stream from one seed
CLEAR_HEIGHT_STREAM = 99
YEAR_BUILT_STREAM = 199
ASK_RENT_STREAM = 299


def comp_seed(index: int, asset_type: AssetType) -> int:
    """Seed for the candidate at `index`."""
    return string_seed(f"{index}|{asset_type.value}")


def synthesize_comp(
    index: int,
    point: RawCandidatePoint,
    subject_coordinate: Coordinate,
    asset_type: AssetType,
) -> Comp:
    """
    Generate the comp for one candidate point.

    Args:
        index: Position of the point in the candidate dataset
        point: Candidate location
        subject_coordinate: Subject location, for distance
        asset_type: Asset type being analysed

    Returns:
        Comp with generated size, clear height, vintage and rent
    """
    profile = get_asset_profile(asset_type)
    seed = comp_seed(index, asset_type)
    coordinate = point.coordinate

    square_feet = round_half_up(15000 + pseudo_random_01(seed) * 110000)
    clear_height = round_half_up(12 + pseudo_random_01(seed + CLEAR_HEIGHT_STREAM) * 30)
    year_built = 1970 + round_half_up(pseudo_random_01(seed + YEAR_BUILT_STREAM) * 55)
    ask_rent = round_to(
        profile.rent_base * (0.75 + pseudo_random_01(seed + ASK_RENT_STREAM) * 0.5), 2
    )

    return Comp(
        comp_id=index,
        name=f"{asset_type.value} Comp {index + 1}",
        coordinate=coordinate,
        asset_type=asset_type,
        distance_miles=great_circle_distance_miles(subject_coordinate, coordinate),
        square_feet=square_feet,
        clear_height=clear_height,
        year_built=year_built,
        ask_rent=ask_rent,
    )
