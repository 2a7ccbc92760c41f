"""Request/response shapes for wage level classification and the full lookup report."""

import math
from typing import Optional

from prevailing_wage.classify.lottery import estimate_lottery_chance
from prevailing_wage.classify.wage_level import (
    WAGE_UNITS,
    WageLevels,
    determine_wage_level,
    normalize_to_hourly,
)
from prevailing_wage.match.providers import MatchProvider, WageLookupQuery

DISCLAIMER = (
    "Results are estimates for informational purposes only and not legal advice. "
    "Providing an exact SOC code generally yields the most accurate result. "
    "Consult your employer or immigration counsel."
)


def _finite(value) -> bool:
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def classify_offer(request: dict) -> dict:
    """
    {offeredWage, offeredUnit, matchedWages: {level1..4}}
        -> {offeredHourly, computedLevel, belowLevel1}
    """
    if "offeredWage" not in request:
        raise ValueError("offeredWage is required")
    unit = request.get("offeredUnit", "hourly")
    if unit not in WAGE_UNITS:
        raise ValueError("offeredUnit must be 'hourly' or 'annual'")
    matched = request.get("matchedWages")
    if not isinstance(matched, dict):
        raise ValueError("matchedWages must be an object with level1..level4")

    wages = WageLevels.from_mapping(matched)
    offered_hourly = normalize_to_hourly(request["offeredWage"], unit)
    return determine_wage_level(offered_hourly, wages).to_dict()


def build_wage_report(provider: MatchProvider, soc_or_title: str, location: str, offered_wage,
                      offered_unit: str = "annual", year: Optional[str] = None,
                      area_code: Optional[str] = None) -> dict:
    """Look up prevailing wages for a query, classify the offer, and attach the lottery weight."""
    if not soc_or_title or not location or not _finite(offered_wage):
        raise ValueError("Missing required fields: socOrTitle, location, offeredWage")
    if offered_unit not in WAGE_UNITS:
        raise ValueError("offeredUnit must be 'hourly' or 'annual'")

    query = WageLookupQuery(soc_or_title=soc_or_title, year=year, area_code=area_code, location=location)
    match = provider.lookup(query)
    if match is None:
        raise LookupError(f"No prevailing wage found for {soc_or_title!r}")

    offered_hourly = normalize_to_hourly(float(offered_wage), offered_unit)
    determination = determine_wage_level(offered_hourly, match.wages)

    return {
        "inputs": {
            "socOrTitle": soc_or_title,
            "location": location,
            "year": year,
            "offeredWage": offered_wage,
            "offeredUnit": offered_unit,
            "areaCode": area_code,
        },
        "providerMatch": {
            "soc": match.matched_soc_code,
            "title": match.matched_soc_title,
            "area": match.area_name,
            "unit": match.unit,
            "wages": match.wages,
            "source": match.source,
        },
        "computation": {
            "offeredHourly": determination.offered_hourly,
            "level": determination.computed_level,
            "belowLevel1": determination.below_level1,
        },
        "lottery": estimate_lottery_chance(determination.computed_level),
        "disclaimer": DISCLAIMER,
    }
