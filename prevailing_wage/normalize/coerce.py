"""Loose numeric parsing and hourly/annual wage conversion used at ingestion time."""

import math
from typing import Optional

import pandas as pd

# Policy constant: 40 hours/week * 52 weeks. Not derived from calendar data.
HOURS_PER_YEAR = 2080


def coerce_number(raw) -> Optional[float]:
    """
    Parse a loosely formatted number such as "$1,234.50".

    Strips "$" and "," and surrounding whitespace. Returns None (never 0 or
    NaN) when the input is absent or does not parse to a finite number.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else None
    try:
        if pd.isna(raw):
            return None
    except (TypeError, ValueError):
        return None

    s = str(raw).replace("$", "").replace(",", "").strip()
    if not s:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def to_hourly(value: Optional[float], unit_hint: Optional[str]) -> Optional[float]:
    """Convert to hourly; anything other than an "annual" hint is taken as already hourly."""
    if value is None:
        return None
    if unit_hint == "annual":
        return value / HOURS_PER_YEAR
    return value
