"""CLI tool to check configured paths and report which wage years are available."""

import argparse
import sys
from pathlib import Path

from prevailing_wage.io.readers import load_paths_config
from prevailing_wage.io.store import WageIndexStore
from prevailing_wage.normalize.mappings import DEFAULT_LAYOUTS_DIR

ARTIFACT_SUBDIRS = ["tables", "metrics"]


def main(argv=None) -> int:
    """Validate data_root, create artifacts_root subdirectories, list years."""
    parser = argparse.ArgumentParser(description="Check configured paths")
    parser.add_argument("--paths", required=True, help="Path to paths.yaml config")
    args = parser.parse_args(argv)

    config_path = Path(args.paths)
    if not config_path.exists():
        print(f"ERROR: Config file not found: {config_path}")
        return 1
    config = load_paths_config(str(config_path))

    print("=" * 60)
    print("PATH VALIDATION")
    print("=" * 60)

    for key in ("data_root", "artifacts_root"):
        if not config.get(key):
            print(f"ERROR: {key} not defined in config")
            return 1

    data_root = Path(config["data_root"]).expanduser().resolve()
    artifacts_root = Path(config["artifacts_root"]).expanduser().resolve()
    print(f"\ndata_root: {data_root}")
    print(f"artifacts_root: {artifacts_root}")
    print(f"default_year: {config.get('default_year', '-')}\n")

    print("Checking data_root...")
    if not data_root.is_dir():
        print(f"  ✗ ERROR: data_root is not an existing directory: {data_root}")
        print("  It should contain extracted wage archives under wages/<year>/.")
        return 1
    print("  ✓ OK: data_root exists and is a directory")

    wages_dir = data_root / "wages"
    source_years = sorted(p.name for p in wages_dir.iterdir() if p.is_dir()) if wages_dir.is_dir() else []
    print(f"  Extracted years: {', '.join(source_years) if source_years else 'none'}")

    print("\nChecking artifacts_root...")
    if artifacts_root.exists() and not artifacts_root.is_dir():
        print(f"  ✗ ERROR: artifacts_root exists but is not a directory: {artifacts_root}")
        return 1
    for subdir in ARTIFACT_SUBDIRS:
        (artifacts_root / subdir).mkdir(parents=True, exist_ok=True)
    print("  ✓ OK: artifacts_root ready")
    stored = WageIndexStore(artifacts_root).years()
    print(f"  Stored index years: {', '.join(stored) if stored else 'none'}")

    print("\nChecking layout registry...")
    layout_file = DEFAULT_LAYOUTS_DIR / "oflc.yml"
    if not layout_file.exists():
        print(f"  ✗ ERROR: layout registry not found: {layout_file}")
        return 1
    print(f"  ✓ OK: {layout_file}")

    print("\n" + "=" * 60)
    print("PATH VALIDATION COMPLETE")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
