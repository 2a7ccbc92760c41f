"""
Classify files in an extracted wage archive by the role they play.

Filename fragments and header sets come from configs/layouts/oflc.yml:
- area dictionary   edc_export / geography             (area code -> name)
- SOC dictionary    oes_soc_occs / xwalk_plus / onet_occs (SOC code -> title)
- direct wage file  alc_export + headers Level1, Area, SocCode
- generic wage file any file with an area-like and a wage-like header
"""

from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from prevailing_wage.normalize.mappings import ColumnAliases, resolve_header


class FileRole(str, Enum):
    AREA_DICTIONARY = "area_dictionary"
    SOC_DICTIONARY = "soc_dictionary"
    DIRECT_WAGE = "direct_wage"
    GENERIC_WAGE = "generic_wage"
    UNRECOGNIZED = "unrecognized"

    @property
    def is_dictionary(self) -> bool:
        return self in (FileRole.AREA_DICTIONARY, FileRole.SOC_DICTIONARY)

    @property
    def is_wage(self) -> bool:
        return self in (FileRole.DIRECT_WAGE, FileRole.GENERIC_WAGE)


def _name_has(path: Path, fragments: Iterable[str]) -> bool:
    name = Path(path).name.lower()
    return any(fragment.lower() in name for fragment in fragments)


def dictionary_role(path: Path, layout: dict) -> Optional[FileRole]:
    """Return the dictionary role implied by the filename alone, if any."""
    roles = layout["file_roles"]
    if _name_has(path, roles["area_dictionary"]):
        return FileRole.AREA_DICTIONARY
    if _name_has(path, roles["soc_dictionary"]):
        return FileRole.SOC_DICTIONARY
    return None


def wage_file_role(path: Path, headers: Iterable[str], layout: dict,
                   aliases: ColumnAliases) -> FileRole:
    """Decide between the direct fast path, the generic fallback, or neither."""
    headers = list(headers)
    required = layout["direct_schema"]["required_headers"]
    if _name_has(path, layout["file_roles"]["direct_wage"]) and all(h in headers for h in required):
        return FileRole.DIRECT_WAGE

    has_area = resolve_header(headers, aliases.area_headers()) is not None
    has_wage = resolve_header(headers, aliases.wage_headers()) is not None
    if has_area and has_wage:
        return FileRole.GENERIC_WAGE
    return FileRole.UNRECOGNIZED


def classify_file(path: Path, headers: Iterable[str], layout: dict,
                  aliases: ColumnAliases) -> FileRole:
    """Single tagged role for a file: dictionary naming wins over wage headers."""
    role = dictionary_role(path, layout)
    if role is not None:
        return role
    return wage_file_role(path, headers, layout, aliases)
