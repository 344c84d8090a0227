#!/usr/bin/env python3
"""
run_pipeline.py
~~~~~~~~~~~~~~~
Convenience orchestrator that runs the staged report in order:

01_scan   → raw data QA evidence
02_report → cleaned tables, trend fit and charts

Each stage fetches the dataset itself; nothing is carried between runs.
"""

from __future__ import annotations

import argparse
import subprocess
import sys
from typing import Iterable, Optional, Sequence


def _run(step: Sequence[str]) -> None:
    print(f"\nRunning: {' '.join(step)}")
    subprocess.run(step, check=True)


def build_steps(config_path: str, source: Optional[str], skip_scan: bool) -> Iterable[list[str]]:
    exe = [sys.executable]
    extra = ["--source", source] if source else []
    steps = []
    if not skip_scan:
        steps.append(exe + ["scripts/01_scan.py", "--config", config_path] + extra)
    steps.append(exe + ["scripts/02_report.py", "--config", config_path] + extra)
    return steps


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the full shooting incident report.")
    parser.add_argument("--config", default="config.yaml", help="Path to config file.")
    parser.add_argument("--source", default=None, help="Override the dataset URL or local CSV path.")
    parser.add_argument("--skip-scan", action="store_true", help="Skip the raw data QA stage.")
    args = parser.parse_args()

    for step in build_steps(args.config, args.source, args.skip_scan):
        _run(step)

    print("\nPipeline complete. See outputs/ for tables and figures.")


if __name__ == "__main__":
    main()
