"""Column alias resolution for OFLC wage exports.

Government wage exports have renamed their columns many times. The layout
registry (configs/layouts/oflc.yml) lists every known name for each field in
priority order; `pick` walks that list and returns the first usable value.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

import yaml

_REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_LAYOUTS_DIR = _REPO_ROOT / "configs" / "layouts"

ROMAN = {1: "I", 2: "II", 3: "III", 4: "IV"}
LEVELS = (1, 2, 3, 4)

_layout_cache: Dict[str, dict] = {}


def load_oflc_layout(layouts_dir: Union[str, Path, None] = None) -> dict:
    """Load the OFLC layout registry (header aliases, file roles, direct schema)."""
    layout_path = Path(layouts_dir or DEFAULT_LAYOUTS_DIR) / "oflc.yml"
    key = str(layout_path)
    if key in _layout_cache:
        return _layout_cache[key]
    if not layout_path.exists():
        raise FileNotFoundError(f"OFLC layout registry not found: {layout_path}")

    with open(layout_path, 'r') as f:
        layout = yaml.safe_load(f)
    _layout_cache[key] = layout
    return layout


def is_blank(value) -> bool:
    """True for values a CSV row uses to mean "nothing here"."""
    if value is None:
        return True
    if isinstance(value, float) and value != value:  # NaN from short rows
        return True
    return isinstance(value, str) and value == ""


def pick(row: Mapping[str, object], candidates: List[str]):
    """
    Return the first non-empty value in `row` among `candidates`.

    Candidates are checked in list order, so earlier (more current) column
    names always win over later synonyms regardless of the row's key order.
    Returns None when no candidate holds a value.
    """
    for name in candidates:
        value = row.get(name)
        if not is_blank(value):
            return value
    return None


def level_aliases(level: int, unit: str, patterns: List[str]) -> List[str]:
    """
    Expand the wage-level name patterns for one level and unit.

    >>> level_aliases(2, "hourly", ["Level {n} {unit}", "Level {roman} - {unit}"])
    ['Level 2 Hourly', 'Level II - Hourly']
    """
    return [
        p.format(n=level, roman=ROMAN[level], unit=unit.capitalize())
        for p in patterns
    ]


@dataclass
class ColumnAliases:
    """Resolved alias lists for the generic (non fixed-layout) wage schema."""

    soc_code: List[str]
    soc_title: List[str]
    area_code: List[str]
    area_name: List[str]
    hourly: Dict[int, List[str]] = field(default_factory=dict)
    annual: Dict[int, List[str]] = field(default_factory=dict)

    @classmethod
    def from_layout(cls, layout: dict) -> "ColumnAliases":
        aliases = layout["aliases"]
        patterns = layout["wage_level_patterns"]
        return cls(
            soc_code=list(aliases["soc_code"]),
            soc_title=list(aliases["soc_title"]),
            area_code=list(aliases["area_code"]),
            area_name=list(aliases["area_name"]),
            hourly={n: level_aliases(n, "hourly", patterns) for n in LEVELS},
            annual={n: level_aliases(n, "annual", patterns) for n in LEVELS},
        )

    def area_headers(self) -> List[str]:
        return self.area_code + self.area_name

    def wage_headers(self) -> List[str]:
        names = []
        for n in LEVELS:
            names.extend(self.hourly[n])
            names.extend(self.annual[n])
        return names


def resolve_header(columns: List[str], aliases: List[str]) -> Optional[str]:
    """Find the first alias present among `columns` (exact match, alias order)."""
    present = set(columns)
    for alias in aliases:
        if alias in present:
            return alias
    return None
