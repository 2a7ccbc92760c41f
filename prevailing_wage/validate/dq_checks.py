"""Data quality checks for a built wage index."""

from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from prevailing_wage.curate.wage_rows import RECORD_COLUMNS

LEVEL_COLS = ["level1", "level2", "level3", "level4"]


def check_index(records: Sequence[dict]) -> Dict[str, object]:
    """Summarise schema, nulls, tier ordering and duplicate (soc, area) pairs.

    Tier order is reported, not corrected: source figures are trusted.
    """
    df = pd.DataFrame(list(records))
    missing: List[str] = [c for c in RECORD_COLUMNS if c not in df.columns]
    report: Dict[str, object] = {
        "row_count": len(df),
        "missing_columns": missing,
        "null_counts": {},
        "non_hourly_rows": 0,
        "tier_order_violations": 0,
        "distinct_socs": 0,
        "distinct_areas": 0,
        "duplicate_pairs": 0,
    }
    if df.empty or missing:
        return report

    report["null_counts"] = {c: int(n) for c, n in df[RECORD_COLUMNS].isna().sum().items() if n}
    report["non_hourly_rows"] = int((df["unit"] != "hourly").sum())

    vals = df[LEVEL_COLS].to_numpy(dtype=float, na_value=np.nan)
    complete = ~np.isnan(vals).any(axis=1)
    ordered = (np.diff(vals, axis=1) >= 0).all(axis=1)
    report["tier_order_violations"] = int((complete & ~ordered).sum())

    report["distinct_socs"] = int(df["soc"].nunique())
    report["distinct_areas"] = int(df[["areaCode", "areaName"]].drop_duplicates().shape[0])
    report["duplicate_pairs"] = int(df.duplicated(subset=["soc", "areaCode"]).sum())
    return report
