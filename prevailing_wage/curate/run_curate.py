"""CLI entrypoint for building the wage index from an extracted OFLC archive."""

import argparse
import logging
import sys
from pathlib import Path

from prevailing_wage.curate.build_wage_index import build_wage_index
from prevailing_wage.curate.file_roles import classify_file
from prevailing_wage.io.readers import (
    PARSE_ERRORS,
    load_paths_config,
    read_header,
    resolve_data_path,
    sniff_delimiter,
    walk_csv_files,
)
from prevailing_wage.io.store import WageIndexStore
from prevailing_wage.normalize.mappings import ColumnAliases, load_oflc_layout
from prevailing_wage.validate.dq_checks import check_index


def _dry_run(source_dir: Path) -> None:
    layout = load_oflc_layout()
    aliases = ColumnAliases.from_layout(layout)
    files = walk_csv_files(source_dir)
    print(f"  Found {len(files)} CSV file(s):")
    for path in files:
        try:
            headers = read_header(path, sniff_delimiter(path, layout["delimiters"]))
        except PARSE_ERRORS as e:
            print(f"    [unreadable] {path.relative_to(source_dir)}: {e}")
            continue
        role = classify_file(path, headers, layout, aliases)
        print(f"    [{role.value}] {path.relative_to(source_dir)}")
    print("\n  DRY RUN: no records were written.")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Build the prevailing wage index")
    parser.add_argument("--paths", required=True, help="Path to paths.yaml config")
    parser.add_argument("--year", help="Year label for the batch, e.g. 2025-26 (defaults to default_year)")
    parser.add_argument("--dir", help="Extracted archive directory (defaults to <data_root>/wages/<year>)")
    parser.add_argument("--dry-run", action="store_true", help="Classify files without writing outputs")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s  %(message)s")

    config = load_paths_config(args.paths)
    year = args.year or config.get("default_year")
    if not year:
        print("ERROR: --year not given and no default_year in config")
        return 1
    artifacts_root = config.get("artifacts_root", "artifacts")
    source_dir = Path(args.dir) if args.dir else resolve_data_path(config["data_root"], "wages", str(year))

    print("=" * 60)
    print("WAGE INDEX BUILD" + (" [DRY RUN]" if args.dry_run else ""))
    print("=" * 60)
    print(f"Source: {source_dir}")
    print(f"Year: {year}")
    print(f"Artifacts root: {artifacts_root}")
    print()

    if not source_dir.is_dir():
        print(f"ERROR: Directory not found: {source_dir}")
        return 1

    if args.dry_run:
        _dry_run(source_dir)
        return 0

    store = WageIndexStore(artifacts_root)
    result = build_wage_index(
        source_dir,
        year=year,
        store=store,
        metrics_dir=Path(artifacts_root) / "metrics",
    )

    print(f"\n  Parsed records: {result.count:,}")
    print(f"  Files failed: {result.files_failed}")
    if result.persisted:
        print(f"  ✓ Replaced year {year} in {store.partition_dir(year)}")
    else:
        print(f"  No records; existing index for {year} left unchanged")

    if result.count:
        dq = check_index(result.records)
        print(f"  Distinct SOCs: {dq['distinct_socs']:,}, distinct areas: {dq['distinct_areas']:,}")
        print(f"  Duplicate (soc, area) rows: {dq['duplicate_pairs']:,}")
        if dq["tier_order_violations"]:
            print(f"  WARNING: {dq['tier_order_violations']:,} rows with non-ascending levels")
        print("\n  Sample records:")
        for rec in result.samples[:3]:
            print(f"    {rec['soc']} {rec['title']} | {rec['areaName']} | "
                  f"{rec['level1']:.2f} / {rec['level2']:.2f} / {rec['level3']:.2f} / {rec['level4']:.2f}")

    print("\n" + "=" * 60)
    print("WAGE INDEX BUILD COMPLETE")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
