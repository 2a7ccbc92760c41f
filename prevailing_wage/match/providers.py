"""
Match a free-text occupation query to one wage index record.

A `MatchProvider` holds an ordered list of backends and returns the first
backend's hit. Backends report "no match" with None; read failures are
raised, never swallowed, so a broken store is not mistaken for an empty one.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from prevailing_wage.io.store import WageIndexStore

logger = logging.getLogger(__name__)


@dataclass
class WageLookupQuery:
    soc_or_title: str
    year: Optional[str] = None
    area_code: Optional[str] = None
    location: str = ""

    @property
    def needle(self) -> str:
        return (self.soc_or_title or "").strip().lower()


@dataclass
class WageLookupResult:
    matched_soc_code: str
    matched_soc_title: str
    area_name: str
    area_code: str
    wages: Dict[str, float]
    unit: str = "hourly"
    source: str = ""

    @classmethod
    def from_record(cls, record: dict, source: str) -> "WageLookupResult":
        return cls(
            matched_soc_code=str(record["soc"]),
            matched_soc_title=str(record["title"]),
            area_name=str(record["areaName"]),
            area_code=str(record.get("areaCode") or ""),
            wages={f"level{n}": float(record[f"level{n}"]) for n in (1, 2, 3, 4)},
            source=source,
        )


def best_match(records: Iterable[dict], query: WageLookupQuery) -> Optional[dict]:
    """
    Exact SOC code first, then the first title containing the query, then
    the first SOC code starting with it. Area-filtered when the query has an
    area code.
    """
    needle = query.needle
    if not needle:
        return None
    pool = list(records)
    if query.area_code:
        pool = [r for r in pool if str(r.get("areaCode") or "") == query.area_code]

    for r in pool:
        if str(r["soc"]).lower() == needle:
            return r
    for r in pool:
        if needle in str(r["title"]).lower():
            return r
    for r in pool:
        if str(r["soc"]).lower().startswith(needle):
            return r
    return None


class StoreBackend:
    """Looks up the persisted index for the query's year (or the latest stored year)."""

    name = "store"

    def __init__(self, store: WageIndexStore, default_year: Optional[str] = None):
        self.store = store
        self.default_year = default_year

    def lookup(self, query: WageLookupQuery) -> Optional[WageLookupResult]:
        year = query.year or self.default_year or self.store.latest_year()
        if not year:
            return None
        rec = best_match(self.store.read_year(year), query)
        return WageLookupResult.from_record(rec, self.name) if rec else None


class RecordsBackend:
    """In-memory records, e.g. the list returned by a fresh index build."""

    name = "records"

    def __init__(self, records: Sequence[dict]):
        self.records = list(records)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "RecordsBackend":
        path = Path(path)
        if not path.exists():
            return cls([])
        with open(path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON list of records in {path}")
        return cls(data)

    def lookup(self, query: WageLookupQuery) -> Optional[WageLookupResult]:
        rec = best_match(self.records, query)
        return WageLookupResult.from_record(rec, self.name) if rec else None


SAMPLE_RECORDS: List[dict] = [
    {"soc": "15-1252", "title": "Software Developers", "areaCode": "",
     "areaName": "United States (National)", "unit": "hourly",
     "level1": 35.0, "level2": 45.0, "level3": 60.0, "level4": 80.0},
    {"soc": "15-1211", "title": "Computer Systems Analysts", "areaCode": "",
     "areaName": "United States (National)", "unit": "hourly",
     "level1": 32.0, "level2": 42.0, "level3": 55.0, "level4": 70.0},
    {"soc": "13-2011", "title": "Accountants and Auditors", "areaCode": "",
     "areaName": "United States (National)", "unit": "hourly",
     "level1": 28.0, "level2": 36.0, "level3": 48.0, "level4": 62.0},
]


class StaticBackend:
    """Built-in national sample; falls back to its first entry so it always answers."""

    name = "static"

    def __init__(self, records: Optional[Sequence[dict]] = None):
        self.records = list(records or SAMPLE_RECORDS)

    def lookup(self, query: WageLookupQuery) -> Optional[WageLookupResult]:
        # Area codes do not apply to national sample figures.
        rec = best_match(self.records, WageLookupQuery(query.soc_or_title, query.year))
        return WageLookupResult.from_record(rec or self.records[0], self.name)


@dataclass
class MatchProvider:
    backends: List[object] = field(default_factory=list)

    def lookup(self, query: WageLookupQuery) -> Optional[WageLookupResult]:
        for backend in self.backends:
            result = backend.lookup(query)
            if result is not None:
                logger.info("Matched %r via %s: %s %s", query.soc_or_title,
                            result.source, result.matched_soc_code, result.area_name)
                return result
        return None


def default_provider(artifacts_root: Union[str, Path], default_year: Optional[str] = None,
                     use_sample: bool = True) -> MatchProvider:
    """Store first, then (optionally) the built-in sample."""
    backends: List[object] = [StoreBackend(WageIndexStore(artifacts_root), default_year)]
    if use_sample:
        backends.append(StaticBackend())
    return MatchProvider(backends)
