"""CLI: look up prevailing wages for an occupation and classify an offered wage."""

import argparse
import json
import logging
import sys

from prevailing_wage.classify.report import build_wage_report
from prevailing_wage.io.readers import load_paths_config
from prevailing_wage.match.providers import default_provider


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Determine the wage level of a job offer")
    parser.add_argument("--paths", required=True, help="Path to paths.yaml config")
    parser.add_argument("--query", required=True, help="SOC code or occupation title")
    parser.add_argument("--location", required=True, help="Worksite location (free text)")
    parser.add_argument("--wage", required=True, type=float, help="Offered wage")
    parser.add_argument("--unit", default="annual", choices=["hourly", "annual"])
    parser.add_argument("--area-code", help="Restrict the match to one area code")
    parser.add_argument("--year", help="Wage year label (defaults to default_year)")
    parser.add_argument("--no-sample", action="store_true",
                        help="Do not fall back to the built-in national sample")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s  %(message)s")

    config = load_paths_config(args.paths)
    year = args.year or config.get("default_year")
    provider = default_provider(config.get("artifacts_root", "artifacts"), year,
                                use_sample=not args.no_sample)
    try:
        report = build_wage_report(provider, args.query, args.location, args.wage,
                                   offered_unit=args.unit, year=year, area_code=args.area_code)
    except (ValueError, LookupError) as e:
        print(f"ERROR: {e}")
        return 1

    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
