"""
02_report.py
~~~~~~~~~~~~
Second stage: one full pass of load → clean → aggregate → trend → charts.

* rows with an unparseable date or time are quarantined and written to
  tables/quarantined_rows.csv instead of being dropped;
* a degenerate trend fit is reported and the yearly chart is drawn without
  fitted lines;
* a fetch or schema failure stops the run with no partial report.
"""

import argparse
from pathlib import Path

from nypd_shootings.config import DEFAULT_CONFIG_PATH
from nypd_shootings.reporting import build_report


def main() -> None:
    parser = argparse.ArgumentParser(description="Build the shooting incident report.")
    parser.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("--source", default=None, help="Override the dataset URL or local CSV path.")
    args = parser.parse_args()

    result = build_report(config_path=Path(args.config), source=args.source)

    print("\n=== REPORT COMPLETE ===")
    print(f" Canonical rows: {len(result.canonical)}")
    print(f" Quarantined:    {result.n_quarantined}")
    print(f" Trend fitted:   {'yes' if result.trend is not None else 'no'}")


if __name__ == "__main__":
    main()
