"""
Narrative summary for a market report.

Turns the engine outputs into a few client-readable paragraphs. Wording is
fixed; only the signals and figures vary.
"""

from typing import List, Sequence

from .comp_engine.models import Comp
from .demographics import find_ring
from .models import AssetType, DemographicRing, MarketStats, RankedRoute


STRONG_INCOME_THRESHOLD = 90000

# Vacancy bands: below TIGHT is tight, below BALANCED is balanced, else soft
TIGHT_VACANCY = 0.08
BALANCED_VACANCY = 0.14

MACRO_COMMENTARY = (
    "Macro commentary: the broader MSA benefits from diversified employment "
    "(government, technology, and professional services), ongoing infrastructure "
    "investment, and above-average long-run population growth versus many peer "
    "markets, which should support durable demand over a full hold period."
)

MODELLED_DATA_NOTICE = (
    "This report blends live geocoding with modeled market and demographic "
    "estimates. Plug in premium data sources for production underwriting."
)


def income_signal(median_income: int) -> str:
    if median_income > STRONG_INCOME_THRESHOLD:
        return "strong household purchasing power"
    return "moderate household purchasing power"


def vacancy_signal(vacancy_rate: float) -> str:
    if vacancy_rate < TIGHT_VACANCY:
        return "tight"
    if vacancy_rate < BALANCED_VACANCY:
        return "balanced"
    return "soft"


def route_sentence(routes: Sequence[RankedRoute]) -> str:
    closest = " and ".join(r.name for r in routes[:2])
    if closest:
        return f"Regional access is a major strength, with immediate connectivity to {closest}."
    return (
        "Regional access appears reasonable, but dynamic route-service data "
        "was unavailable for this run."
    )


def build_summary(
    display_name: str,
    asset_type: AssetType,
    subject_sf: float,
    demographics: Sequence[DemographicRing],
    comps: Sequence[Comp],
    market_stats: MarketStats,
    routes: Sequence[RankedRoute],
) -> List[str]:
    """
    Compose the summary paragraphs.

    Returns:
        Paragraph strings in display order
    """
    five_mile = find_ring(demographics, 5)
    median_income = five_mile.median_income if five_mile else 0

    return [
        f"Analyzed location: {display_name}",
        (
            f"The {subject_sf:,.0f} SF {asset_type.value.lower()} asset sits in a trade area with "
            f"{income_signal(median_income)}, with median household income of approximately "
            f"${median_income:,} in the 5-mile band."
        ),
        (
            f"Competitive supply appears {vacancy_signal(market_stats.vacancy_rate)}: "
            f"{len(comps)} comparable properties met your filters inside 5 miles and "
            f"±50% of subject size, with average asking rents around "
            f"${market_stats.avg_asking_rent:.2f}."
        ),
        f"{route_sentence(routes)} This supports tenant retention and future leasing velocity.",
        MACRO_COMMENTARY,
        MODELLED_DATA_NOTICE,
    ]
