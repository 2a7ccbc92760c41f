"""
Selection-weight heuristics derived from a wage level.

Two independent policies:
- `estimate_lottery_chance`: weight equals the level (1..4), a fixed policy.
- weighted buckets: entries per level from configs/lottery.yml
  (default {1: 1, 2: 2, 3: 4, 4: 10}), used by
  `weighted_selection_probability`.
Neither is a statistical model of actual selection odds.
"""

import logging
import math
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

_REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_LOTTERY_CONFIG = _REPO_ROOT / "configs" / "lottery.yml"

DEFAULT_WEIGHTED_BUCKETS: Dict[int, float] = {1: 1, 2: 2, 3: 4, 4: 10}

SALARY_WEIGHT_MIN = 0.1
SALARY_WEIGHT_MAX = 10.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _check_level(level) -> int:
    if isinstance(level, bool) or level not in (1, 2, 3, 4):
        raise ValueError("wage level must be 1|2|3|4")
    return int(level)


def _check_counts(total_registrations, selected_count):
    if not math.isfinite(total_registrations) or total_registrations <= 0:
        raise ValueError("total_registrations must be > 0")
    if not math.isfinite(selected_count) or selected_count < 0:
        raise ValueError("selected_count must be >= 0")


def estimate_lottery_chance(level: int) -> dict:
    """Level N receives N chances in selection weighting."""
    weight = _check_level(level)
    plural = "s" if weight > 1 else ""
    return {
        "weight": weight,
        "rationale": (
            f"Per user-defined policy, Level {weight} receives {weight} "
            f"chance{plural} in selection weighting."
        ),
    }


def load_weighted_buckets(config_path: Union[str, Path, None] = None) -> Dict[int, float]:
    """Read `weighted_buckets` from the lottery config, or the default when absent."""
    path = Path(config_path or DEFAULT_LOTTERY_CONFIG)
    if not path.exists():
        logger.info("Lottery config not found at %s; using default buckets", path)
        return dict(DEFAULT_WEIGHTED_BUCKETS)

    with open(path, 'r') as f:
        config = yaml.safe_load(f) or {}
    buckets = config.get("weighted_buckets")
    if not buckets:
        return dict(DEFAULT_WEIGHTED_BUCKETS)
    return {int(k): float(v) for k, v in buckets.items()}


def weighted_selection_probability(level: int, total_registrations: float, selected_count: float,
                                   buckets: Optional[Mapping[int, float]] = None) -> dict:
    """
    Single-case estimate: entries / total_registrations * selected_count, clamped to [0, 1].

    The denominator approximates the total weighted entries by the raw
    registration count. A level missing from `buckets` gets one entry.
    Without `buckets`, the entries come from configs/lottery.yml.
    """
    level = _check_level(level)
    _check_counts(total_registrations, selected_count)
    if buckets is None:
        buckets = load_weighted_buckets()

    entries = float(buckets.get(level) or 1)
    probability = _clamp(entries / total_registrations * selected_count, 0.0, 1.0)
    return {
        "entries": entries,
        "probability": probability,
        "buckets": dict(buckets),
        "inputs": {
            "wageLevel": level,
            "totalRegistrations": total_registrations,
            "selectedCount": selected_count,
        },
    }


def random_selection_probability(total_registrations: float, selected_count: float) -> dict:
    """Unweighted lottery: selected_count / total_registrations, clamped to [0, 1]."""
    _check_counts(total_registrations, selected_count)
    return {
        "probability": _clamp(selected_count / total_registrations, 0.0, 1.0),
        "inputs": {"totalRegistrations": total_registrations, "selectedCount": selected_count},
    }


def salary_weighted_probability(offered_salary_annual: float, median_salary_annual: float,
                                total_registrations: float, selected_count: float) -> dict:
    """Weight by offered/median salary ratio, clamped to [0.1, 10]."""
    if not math.isfinite(offered_salary_annual) or offered_salary_annual <= 0:
        raise ValueError("offered_salary_annual must be > 0")
    if not math.isfinite(median_salary_annual) or median_salary_annual <= 0:
        raise ValueError("median_salary_annual must be > 0")
    _check_counts(total_registrations, selected_count)

    weight = _clamp(offered_salary_annual / median_salary_annual, SALARY_WEIGHT_MIN, SALARY_WEIGHT_MAX)
    return {
        "weight": weight,
        "probability": _clamp(weight / total_registrations * selected_count, 0.0, 1.0),
        "inputs": {
            "offeredSalaryAnnual": offered_salary_annual,
            "medianSalaryForSoc": median_salary_annual,
            "totalRegistrations": total_registrations,
            "selectedCount": selected_count,
        },
    }
