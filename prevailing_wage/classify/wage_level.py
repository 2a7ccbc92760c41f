"""Wage level determination for an offered wage against four prevailing wage tiers.

Boundary rule: tiers are checked from the top down with ">=", so an offer
exactly equal to a tier's wage is placed in that (higher) tier.
"""

import math
from dataclasses import dataclass
from typing import Mapping

from prevailing_wage.normalize.coerce import HOURS_PER_YEAR

WAGE_UNITS = ("hourly", "annual")


class InvalidWageError(ValueError):
    """Offered wage is not a finite, non-negative number."""


@dataclass(frozen=True)
class WageLevels:
    level1: float
    level2: float
    level3: float
    level4: float

    @classmethod
    def from_mapping(cls, wages: Mapping[str, float]) -> "WageLevels":
        try:
            return cls(*(float(wages[f"level{n}"]) for n in (1, 2, 3, 4)))
        except KeyError as e:
            raise ValueError(f"matched wages missing {e.args[0]}") from None


@dataclass(frozen=True)
class Determination:
    offered_hourly: float
    computed_level: int
    below_level1: bool

    def to_dict(self) -> dict:
        return {
            "offeredHourly": self.offered_hourly,
            "computedLevel": self.computed_level,
            "belowLevel1": self.below_level1,
        }


def normalize_to_hourly(value, unit: str, strict: bool = False) -> float:
    """
    Offered wage as hourly.

    Non-finite or negative input becomes 0 unless `strict`, in which case
    InvalidWageError is raised instead. Any unit other than "hourly" is
    treated as annual.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = math.nan
    if not math.isfinite(number) or number < 0:
        if strict:
            raise InvalidWageError(f"offered wage must be a finite number >= 0, got {value!r}")
        return 0.0
    if unit == "hourly":
        return number
    return number / HOURS_PER_YEAR


def determine_wage_level(offered_hourly: float, wages) -> Determination:
    """Place an hourly offer into tier 1-4 and flag offers below the level 1 wage."""
    if not isinstance(wages, WageLevels):
        wages = WageLevels.from_mapping(wages)

    below_level1 = offered_hourly < wages.level1
    if offered_hourly >= wages.level4:
        level = 4
    elif offered_hourly >= wages.level3:
        level = 3
    elif offered_hourly >= wages.level2:
        level = 2
    else:
        level = 1
    return Determination(offered_hourly=offered_hourly, computed_level=level, below_level1=below_level1)
