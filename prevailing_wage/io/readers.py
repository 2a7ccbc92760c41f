"""Helpers for config loading, dataset directory walking and tolerant CSV reads."""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Sequence, Union

import pandas as pd
import yaml

logger = logging.getLogger(__name__)

DEFAULT_DELIMITERS = (",", "\t", ";", "|")

# Errors that mean "this file cannot be parsed"; the caller skips the file.
PARSE_ERRORS = (ValueError, OSError, csv.Error)


def load_paths_config(config_path: str) -> Dict[str, str]:
    """Load paths from YAML config file.

    Args:
        config_path: Path to paths.yaml

    Returns:
        Dictionary with data_root, artifacts_root and default_year
    """
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}
    return config


def resolve_data_path(data_root: str, *parts: str) -> Path:
    """Build absolute path within data root."""
    return Path(data_root) / Path(*parts)


def walk_csv_files(root_dir: Union[str, Path]) -> List[Path]:
    """
    Recursively list every .csv file (case-insensitive suffix) under root_dir.

    Sorted by path so that runs over the same tree visit files in the same order.
    """
    root = Path(root_dir)
    if not root.exists():
        logger.warning("Directory does not exist: %s", root)
        return []
    return sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() == ".csv")


def sniff_delimiter(path: Path, candidates: Sequence[str] = DEFAULT_DELIMITERS) -> str:
    """
    Pick the delimiter that splits the first non-blank line into the most fields.

    Ties go to the earlier candidate. A file with no non-blank line gets the
    first candidate. Raises the usual read errors for unreadable files.
    """
    with open(path, 'r', encoding='utf-8-sig', newline='') as f:
        for line in f:
            if line.strip():
                break
        else:
            return candidates[0]

    best, best_count = candidates[0], 0
    for delim in candidates:
        count = len(line.split(delim))
        if count > best_count:
            best, best_count = delim, count
    return best


def read_csv_frame(path: Path, delimiter: str) -> pd.DataFrame:
    """
    Read a CSV as all-string columns, tolerating ragged rows.

    Rows with too many fields are skipped, short rows are padded with empty
    strings; the header row is kept verbatim apart from a stripped BOM.
    """
    df = pd.read_csv(
        path,
        sep=delimiter,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        on_bad_lines="skip",
        engine="python",
        encoding="utf-8-sig",
    )
    return df.fillna("")


def read_header(path: Path, delimiter: str) -> List[str]:
    """Read only the header row of a CSV."""
    df = pd.read_csv(
        path,
        sep=delimiter,
        dtype=str,
        nrows=0,
        engine="python",
        encoding="utf-8-sig",
    )
    return [str(c) for c in df.columns]


def iter_rows(df: pd.DataFrame) -> Iterator[Dict[str, str]]:
    """Yield each DataFrame row as a plain column → value dict."""
    columns = [str(c) for c in df.columns]
    for values in df.itertuples(index=False, name=None):
        yield dict(zip(columns, values))
