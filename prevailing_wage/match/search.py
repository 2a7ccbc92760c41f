"""Autocomplete over the wage index: SOC codes/titles and areas.

The index holds one record per (file, soc, area) so the same occupation or
area appears many times; both searches dedupe before applying the limit.
"""

from typing import Iterable, List

SCORE_EXACT_SOC = 100
SCORE_TITLE_CONTAINS = 85
SCORE_SOC_PREFIX = 70


def _score(record: dict, q: str) -> int:
    soc = str(record["soc"]).lower()
    if soc == q:
        return SCORE_EXACT_SOC
    if q in str(record["title"]).lower():
        return SCORE_TITLE_CONTAINS
    if soc.startswith(q):
        return SCORE_SOC_PREFIX
    return 0


def search_soc(records: Iterable[dict], q: str, limit: int = 10) -> List[dict]:
    """Distinct (soc, title) pairs matching `q`, best score first."""
    q = (q or "").strip().lower()
    if not q:
        return []

    scored = [(r, _score(r, q)) for r in records]
    scored = [pair for pair in scored if pair[1] > 0]
    scored.sort(key=lambda pair: pair[1], reverse=True)

    seen = set()
    items = []
    for r, _ in scored:
        key = (r["soc"], r["title"])
        if key in seen:
            continue
        seen.add(key)
        items.append({"soc": r["soc"], "title": r["title"]})
        if len(items) >= limit:
            break
    return items


def search_area(records: Iterable[dict], q: str, limit: int = 10) -> List[dict]:
    """Distinct (areaCode, areaName) pairs whose name contains `q`."""
    q = (q or "").strip().lower()
    if not q:
        return []

    seen = set()
    items = []
    for r in records:
        if q not in str(r["areaName"]).lower():
            continue
        key = (r.get("areaCode") or "", r["areaName"])
        if key in seen:
            continue
        seen.add(key)
        items.append({"areaName": r["areaName"], "areaCode": key[0]})
        if len(items) >= limit:
            break
    return items
