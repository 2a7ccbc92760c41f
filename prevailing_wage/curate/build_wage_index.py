"""
Build the canonical wage index from an extracted OFLC wage archive.

Two sequential passes over the recursive CSV walk:
1. cross-reference dictionaries (area names, SOC titles)
2. every wage file (direct fast path or generic alias fallback), row by row

Ingestion is best-effort across the whole tree: unreadable files are skipped,
unusable rows are dropped, and only a non-empty result replaces the stored
index for the year. No deduplication happens here.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from prevailing_wage.curate.file_roles import FileRole, classify_file
from prevailing_wage.curate.wage_rows import normalize_row
from prevailing_wage.curate.xref import CrossReference, build_cross_reference
from prevailing_wage.io.readers import (
    DEFAULT_DELIMITERS,
    PARSE_ERRORS,
    iter_rows,
    read_csv_frame,
    read_header,
    sniff_delimiter,
    walk_csv_files,
)
from prevailing_wage.io.store import DEFAULT_BATCH_SIZE, WageIndexStore
from prevailing_wage.normalize.mappings import ColumnAliases, load_oflc_layout

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 5


@dataclass
class FileStats:
    path: str
    role: str
    delimiter: Optional[str] = None
    rows: int = 0
    accepted: int = 0
    error: Optional[str] = None

    @property
    def rejected(self) -> int:
        return self.rows - self.accepted


@dataclass
class IndexBuildResult:
    count: int
    records: List[dict]
    samples: List[dict]
    year: Optional[str] = None
    persisted: bool = False
    files: List[FileStats] = field(default_factory=list)
    xref: Optional[CrossReference] = None

    @property
    def files_failed(self) -> int:
        return sum(1 for f in self.files if f.error)


def _process_wage_file(path: Path, layout: dict, aliases: ColumnAliases,
                       xref: CrossReference, records: List[dict]) -> FileStats:
    delimiters = layout.get("delimiters") or DEFAULT_DELIMITERS
    stats = FileStats(path=str(path), role=FileRole.UNRECOGNIZED.value)
    try:
        stats.delimiter = sniff_delimiter(path, delimiters)
        headers = read_header(path, stats.delimiter)
        role = classify_file(path, headers, layout, aliases)
        stats.role = role.value
        if not role.is_wage:
            return stats
        df = read_csv_frame(path, stats.delimiter)
    except PARSE_ERRORS as e:
        logger.warning("Cannot read %s: %s; skipping", path.name, e)
        stats.error = str(e)
        return stats

    direct = role is FileRole.DIRECT_WAGE
    for row in iter_rows(df):
        stats.rows += 1
        record = normalize_row(row, xref, layout, aliases, direct=direct)
        if record is not None:
            records.append(record)
            stats.accepted += 1

    logger.info("  %s %s: %d rows, %d records", role.value, path.name, stats.rows, stats.accepted)
    return stats


def build_wage_index(
    root_dir: Union[str, Path],
    year: Optional[str] = None,
    store: Optional[WageIndexStore] = None,
    layouts_dir: Union[str, Path, None] = None,
    metrics_dir: Union[str, Path, None] = None,
    batch_size: Optional[int] = None,
) -> IndexBuildResult:
    """
    Walk `root_dir`, normalize every recognised wage file, and persist the result.

    Args:
        root_dir: Directory tree of an extracted wage archive
        year: Year label tagging the batch (e.g. "2025-26"); required to persist
        store: Store receiving the records; None builds without persisting
        layouts_dir: Directory holding oflc.yml (defaults to configs/layouts)
        metrics_dir: If given, a per-file metrics log is written there
        batch_size: Store insert chunk size (defaults to the layout's)

    Returns:
        IndexBuildResult with count, full record list and the first 5 records
    """
    root = Path(root_dir)
    layout = load_oflc_layout(layouts_dir)
    aliases = ColumnAliases.from_layout(layout)
    started_at = datetime.now(timezone.utc)

    files = walk_csv_files(root)
    logger.info("Found %d CSV file(s) under %s", len(files), root)

    # Pass 1 must finish before any row is normalized.
    xref = build_cross_reference(files, layout)

    records: List[dict] = []
    file_stats: List[FileStats] = []
    for path in files:
        file_stats.append(_process_wage_file(path, layout, aliases, xref, records))

    result = IndexBuildResult(
        count=len(records),
        records=records,
        samples=records[:SAMPLE_SIZE],
        year=year,
        files=file_stats,
        xref=xref,
    )

    if records and store is not None:
        if not year:
            raise ValueError("A year label is required to persist the wage index")
        size = batch_size or layout.get("store", {}).get("batch_size", DEFAULT_BATCH_SIZE)
        store.replace_year(year, records, batch_size=size)
        result.persisted = True
    elif not records:
        logger.warning("No wage records found under %s; stored index left unchanged", root)

    if metrics_dir is not None:
        write_metrics_log(result, Path(metrics_dir), root, started_at)

    return result


def write_metrics_log(result: IndexBuildResult, metrics_dir: Path, root: Path,
                      started_at: datetime) -> Path:
    metrics_dir.mkdir(parents=True, exist_ok=True)
    log_path = metrics_dir / "wage_index_metrics.log"

    role_counts: Dict[str, int] = {}
    for f in result.files:
        role_counts[f.role] = role_counts.get(f.role, 0) + 1

    lines = [
        f"wage_index build - {started_at.isoformat()}",
        f"Root: {root}",
        f"Year: {result.year or '-'}",
        f"Files discovered: {len(result.files)}",
        "",
    ]
    for f in result.files:
        if f.error:
            lines.append(f"  ERR  {f.path}: {f.error}")
        elif f.role in (FileRole.DIRECT_WAGE.value, FileRole.GENERIC_WAGE.value):
            lines.append(f"  OK   {f.path} [{f.role}] rows={f.rows:,} "
                         f"accepted={f.accepted:,} rejected={f.rejected:,}")
        else:
            lines.append(f"  SKIP {f.path} [{f.role}]")

    lines.append("")
    lines.append("=" * 60)
    lines.append(f"Areas in dictionary: {len(result.xref.area_name_by_code) if result.xref else 0:,}")
    lines.append(f"SOC titles in dictionary: {len(result.xref.title_by_soc) if result.xref else 0:,}")
    for role, n in sorted(role_counts.items()):
        lines.append(f"Files {role}: {n}")
    lines.append(f"Files ERR: {result.files_failed}")
    lines.append(f"Total records: {result.count:,}")
    lines.append(f"Persisted: {result.persisted}")

    log_path.write_text("\n".join(lines) + "\n")
    return log_path
