"""
Row normalization: one raw CSV row -> one canonical wage record, or nothing.

Canonical record shape (all wage figures hourly USD):
    {soc, title, areaCode, areaName, unit: "hourly", level1, level2, level3, level4}

Normalization is all-or-nothing per row: a row missing its SOC code, title or
area name, or with any level that does not coerce to a finite number, yields
None and contributes nothing.
"""

from typing import Dict, Mapping, Optional

from prevailing_wage.curate.xref import CrossReference
from prevailing_wage.normalize.coerce import coerce_number, to_hourly
from prevailing_wage.normalize.mappings import LEVELS, ColumnAliases, is_blank, pick

RECORD_COLUMNS = [
    "soc", "title", "areaCode", "areaName", "unit",
    "level1", "level2", "level3", "level4",
]


def _text(value) -> str:
    return "" if is_blank(value) else str(value).strip()


def _record(soc: str, title: str, area_code: str, area_name: str,
            levels: Dict[int, Optional[float]]) -> Optional[dict]:
    if not soc or not title or not area_name:
        return None
    if any(levels[n] is None for n in LEVELS):
        return None
    return {
        "soc": soc,
        "title": title,
        "areaCode": area_code,
        "areaName": area_name,
        "unit": "hourly",
        "level1": levels[1],
        "level2": levels[2],
        "level3": levels[3],
        "level4": levels[4],
    }


def normalize_direct_row(row: Mapping[str, object], xref: CrossReference,
                         direct_schema: dict, aliases: ColumnAliases) -> Optional[dict]:
    """
    Fixed-layout rows (ALC_Export style): codes plus Level1..Level4 hourly.

    Titles and area names come from the cross-reference dictionaries, with any
    in-row name used only when the dictionary has no entry.
    """
    soc = _text(row.get(direct_schema["soc_code"]))
    area_code = _text(row.get(direct_schema["area_code"]))

    title = xref.soc_title(soc) or _text(pick(row, aliases.soc_title))
    area_name = xref.area_name(area_code) or _text(pick(row, aliases.area_name))

    levels = {
        n: coerce_number(row.get(column))
        for n, column in zip(LEVELS, direct_schema["levels"])
    }
    return _record(soc, title, area_code, area_name, levels)


def _generic_level(row: Mapping[str, object], aliases: ColumnAliases, level: int) -> Optional[float]:
    hourly = coerce_number(pick(row, aliases.hourly[level]))
    if hourly is not None:
        return to_hourly(hourly, "hourly")
    annual = coerce_number(pick(row, aliases.annual[level]))
    return to_hourly(annual, "annual")


def normalize_generic_row(row: Mapping[str, object], xref: CrossReference,
                          aliases: ColumnAliases) -> Optional[dict]:
    """
    Rows from files with historical, non-fixed headers.

    Each field is resolved independently through its alias list. Names
    from the dictionaries win over in-row names when both exist.
    """
    soc = _text(pick(row, aliases.soc_code))
    area_code = _text(pick(row, aliases.area_code))
    title = xref.soc_title(soc) or _text(pick(row, aliases.soc_title))
    area_name = xref.area_name(area_code) if area_code else None
    area_name = area_name or _text(pick(row, aliases.area_name))

    levels = {n: _generic_level(row, aliases, n) for n in LEVELS}
    return _record(soc, title, area_code, area_name, levels)


def normalize_row(row: Mapping[str, object], xref: CrossReference, layout: dict,
                  aliases: ColumnAliases, direct: bool) -> Optional[dict]:
    if direct:
        return normalize_direct_row(row, xref, layout["direct_schema"], aliases)
    return normalize_generic_row(row, xref, aliases)
