"""
Cross-reference dictionaries built from the auxiliary files of a wage archive.

Direct-schema wage files carry only codes; the area and SOC title lookup
files shipped alongside them supply the display names. These maps live only
for the duration of one index build.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from prevailing_wage.curate.file_roles import FileRole, dictionary_role
from prevailing_wage.io.readers import (
    DEFAULT_DELIMITERS,
    PARSE_ERRORS,
    iter_rows,
    read_csv_frame,
    sniff_delimiter,
)
from prevailing_wage.normalize.mappings import pick

logger = logging.getLogger(__name__)


@dataclass
class CrossReference:
    area_name_by_code: Dict[str, str] = field(default_factory=dict)
    title_by_soc: Dict[str, str] = field(default_factory=dict)
    files_read: List[str] = field(default_factory=list)
    files_failed: List[str] = field(default_factory=list)

    def area_name(self, area_code) -> Optional[str]:
        if area_code is None:
            return None
        return self.area_name_by_code.get(str(area_code).strip())

    def soc_title(self, soc_code) -> Optional[str]:
        if soc_code is None:
            return None
        return self.title_by_soc.get(str(soc_code).strip())


def _load_pairs(path: Path, code_aliases: List[str], value_aliases: List[str],
                target: Dict[str, str], delimiters: Sequence[str]) -> int:
    """Read one dictionary file into `target`. First non-empty value per code wins."""
    df = read_csv_frame(path, sniff_delimiter(path, delimiters))
    added = 0
    for row in iter_rows(df):
        code = pick(row, code_aliases)
        value = pick(row, value_aliases)
        if code is None or value is None:
            continue
        code = str(code).strip()
        value = str(value).strip()
        if code and value and code not in target:
            target[code] = value
            added += 1
    return added


def build_cross_reference(files: Sequence[Path], layout: dict) -> CrossReference:
    """
    First pass of an index build: populate area and SOC lookup maps.

    Only files whose names mark them as dictionaries are read. A file that
    fails to parse is logged and skipped; whatever was read stays usable.
    """
    xref = CrossReference()
    dictionaries = layout["dictionaries"]
    delimiters = layout.get("delimiters") or DEFAULT_DELIMITERS

    for path in files:
        role = dictionary_role(path, layout)
        if role is None:
            continue
        try:
            if role is FileRole.AREA_DICTIONARY:
                added = _load_pairs(path, dictionaries["area"]["code"], dictionaries["area"]["name"],
                                    xref.area_name_by_code, delimiters)
            else:
                added = _load_pairs(path, dictionaries["soc"]["code"], dictionaries["soc"]["title"],
                                    xref.title_by_soc, delimiters)
        except PARSE_ERRORS as e:
            logger.warning("Cannot read dictionary %s: %s; skipping", path.name, e)
            xref.files_failed.append(str(path))
            continue
        xref.files_read.append(str(path))
        logger.info("  %s %s: %d entries", role.value, path.name, added)

    logger.info("Cross-reference: %d areas, %d SOC titles",
                len(xref.area_name_by_code), len(xref.title_by_soc))
    return xref
