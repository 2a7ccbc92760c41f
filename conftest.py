"""
conftest.py  -  Root-level pytest configuration for prevailing-wage-builder.
============================================================================
Puts the repository root on sys.path and provides fixtures that write small
OFLC-shaped CSV trees into a temporary directory.
"""
from __future__ import annotations

import csv
import sys
from pathlib import Path

import pytest

# Ensure prevailing_wage/ is importable even when invoked from repo root
_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))


def _write_csv(path: Path, header, rows, delimiter: str = ",") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, delimiter=delimiter, lineterminator="\n")
        writer.writerow(header)
        writer.writerows(rows)
    return path


@pytest.fixture
def write_csv():
    """Write a delimited file: write_csv(path, header, rows, delimiter=",")."""
    return _write_csv


GEOGRAPHY_HEADER = ["Area", "AreaName", "StateAb", "CountyTownName"]
GEOGRAPHY_ROWS = [
    ["14460", "Boston-Cambridge-Newton, MA-NH", "MA", "Suffolk County"],
    ["14460", "Boston-Cambridge-Newton, MA-NH", "MA", "Middlesex County"],
    ["41860", "San Francisco-Oakland-Hayward, CA", "CA", "San Francisco County"],
]

SOC_HEADER = ["soccode", "Title", "Description"]
SOC_ROWS = [
    ["15-1252", "Software Developers", "Research and develop software"],
    ["13-2011", "Accountants and Auditors", "Examine financial records"],
]

ALC_HEADER = ["Area", "SocCode", "GeoLvl", "Level1", "Level2", "Level3", "Level4", "Average", "Label"]
ALC_ROWS = [
    ["14460", "15-1252", "1", "45.10", "55.20", "65.30", "75.40", "60.25", "2"],
    ["41860", "15-1252", "1", "55.00", "67.50", "80.00", "92.50", "73.75", "2"],
    ["14460", "13-2011", "1", "30.00", "36.00", "42.00", "48.00", "39.00", "2"],
    # no dictionary entry for this SOC code -> no title -> rejected
    ["14460", "99-9999", "1", "10.00", "11.00", "12.00", "13.00", "11.50", "2"],
]


@pytest.fixture
def oflc_tree(tmp_path):
    """Extracted archive: dictionaries plus one direct-schema wage file (3 valid rows)."""
    root = tmp_path / "OFLC_Wages_2025-26"
    _write_csv(root / "Geography.csv", GEOGRAPHY_HEADER, GEOGRAPHY_ROWS)
    _write_csv(root / "oes_soc_occs.csv", SOC_HEADER, SOC_ROWS)
    _write_csv(root / "ALC_Export.csv", ALC_HEADER, ALC_ROWS)
    return root
