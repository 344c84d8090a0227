"""
01_scan.py
~~~~~~~~~~
First stage of the shooting incident report. Fetches the raw dataset once and
writes QA evidence before anything is cleaned:

* confirms the source is reachable and matches the declared column schema;
* tabulates missing values, counting the "(null)" sentinel as missing;
* records column types, a preview and incidents per borough.
"""

import argparse
from pathlib import Path

from nypd_shootings.config import DEFAULT_CONFIG_PATH
from nypd_shootings.data import scan_dataset


def main():
    ap = argparse.ArgumentParser(description="Stage 01 – scan & QA the raw incident dataset.")
    ap.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    ap.add_argument("--source", default=None, help="Override the dataset URL or local CSV path.")
    args = ap.parse_args()
    scan_dataset(Path(args.config), source=args.source)


if __name__ == "__main__":
    main()
