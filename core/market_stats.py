"""
Market statistics from a filtered comp set.

Vacancy, 12-month net absorption and average asking rent, estimated from
the asset profile and the comps that survived selection. When no comps
survive, fixed fallback averages stand in for the comp set.
"""

from typing import Sequence

from .comp_engine.models import Comp
from .models import AssetType, MarketStats, get_asset_profile
from .seeded import round_half_up


# Fallback averages used when the comp set is empty
FALLBACK_AVG_YEAR_BUILT = 2000
FALLBACK_AVG_DISTANCE_MILES = 2.8

VACANCY_FLOOR = 0.02
BASE_ABSORPTION_SF = 120000
ABSORPTION_PER_COMP_SF = 4600


def _mean(values) -> float:
    values = list(values)
    return sum(values) / len(values)


def build_market_stats(comps: Sequence[Comp], asset_type: AssetType) -> MarketStats:
    """
    Aggregate comps into market statistics.

    Args:
        comps: Comps from a single selection pass
        asset_type: Asset type whose profile supplies the baselines

    Returns:
        MarketStats with vacancy rate, net absorption and average rent
    """
    profile = get_asset_profile(asset_type)

    if comps:
        avg_rent = _mean(c.ask_rent for c in comps)
        avg_year = _mean(c.year_built for c in comps)
        avg_distance = _mean(c.distance_miles for c in comps)
    else:
        avg_rent = profile.rent_base
        avg_year = FALLBACK_AVG_YEAR_BUILT
        avg_distance = FALLBACK_AVG_DISTANCE_MILES

    vacancy_rate = max(
        VACANCY_FLOOR,
        profile.vacancy_base + (avg_distance - 2.5) * 0.007 - (avg_year - 2000) * 0.0003,
    )
    net_absorption = round_half_up(
        (BASE_ABSORPTION_SF + len(comps) * ABSORPTION_PER_COMP_SF) * profile.absorption_factor
    )

    return MarketStats(
        vacancy_rate=vacancy_rate,
        net_absorption=net_absorption,
        avg_asking_rent=avg_rent,
    )
