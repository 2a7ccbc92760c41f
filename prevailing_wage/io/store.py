"""
Year-partitioned Parquet store for the canonical wage index.

Layout:
    <artifacts_root>/tables/wage_index/year=<label>/part-0.parquet

A year is always replaced wholesale (delete then reinsert), never patched.
"""

import logging
import re
import shutil
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

logger = logging.getLogger(__name__)

INDEX_SCHEMA = pa.schema([
    ("soc", pa.string()),
    ("title", pa.string()),
    ("areaCode", pa.string()),
    ("areaName", pa.string()),
    ("unit", pa.string()),
    ("level1", pa.float64()),
    ("level2", pa.float64()),
    ("level3", pa.float64()),
    ("level4", pa.float64()),
])

DEFAULT_BATCH_SIZE = 1000

_YEAR_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class WageIndexStore:
    """Keyed-record store: year label -> list of canonical wage records."""

    def __init__(self, artifacts_root: Union[str, Path]):
        self.artifacts_root = Path(artifacts_root)
        self.base_dir = self.artifacts_root / "tables" / "wage_index"

    def partition_dir(self, year: str) -> Path:
        year = str(year).strip()
        if not _YEAR_RE.match(year):
            raise ValueError(f"Invalid year label: {year!r}")
        return self.base_dir / f"year={year}"

    def years(self) -> List[str]:
        if not self.base_dir.exists():
            return []
        return sorted(
            p.name.split("=", 1)[1]
            for p in self.base_dir.iterdir()
            if p.is_dir() and p.name.startswith("year=") and any(p.glob("*.parquet"))
        )

    def latest_year(self) -> Optional[str]:
        years = self.years()
        return years[-1] if years else None

    def delete_year(self, year: str) -> bool:
        part_dir = self.partition_dir(year)
        if not part_dir.exists():
            return False
        shutil.rmtree(part_dir)
        logger.info("Deleted existing rows for year %s", year)
        return True

    def replace_year(self, year: str, records: Sequence[dict],
                     batch_size: int = DEFAULT_BATCH_SIZE) -> int:
        """
        Delete the year's partition and write `records` in fixed-size chunks.

        Chunks are written one after another to a single Parquet file.
        Returns the number of rows written.
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be > 0")

        part_dir = self.partition_dir(year)
        self.delete_year(year)
        part_dir.mkdir(parents=True, exist_ok=True)
        out_file = part_dir / "part-0.parquet"

        total = len(records)
        inserted = 0
        with pq.ParquetWriter(out_file, INDEX_SCHEMA) as writer:
            for start in range(0, total, batch_size):
                batch = records[start:start + batch_size]
                df = pd.DataFrame(list(batch), columns=INDEX_SCHEMA.names)
                writer.write_table(pa.Table.from_pandas(df, schema=INDEX_SCHEMA, preserve_index=False))
                inserted += len(batch)
                if inserted % (batch_size * 5) == 0 or inserted >= total:
                    logger.info("Inserted %d/%d", inserted, total)

        return inserted

    def read_year(self, year: str) -> List[dict]:
        """All records for a year; empty list when the year was never stored."""
        part_dir = self.partition_dir(year)
        files = sorted(part_dir.glob("*.parquet")) if part_dir.exists() else []
        if not files:
            return []
        frames = [pd.read_parquet(f, engine="pyarrow") for f in files]
        df = pd.concat(frames, ignore_index=True)
        return df.to_dict("records")
