from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from ..analysis.aggregate import hourly_counts, murders_by_region, yearly_by_region
from ..analysis.trend import TrendResult, fit_trend
from ..config import load_config
from ..data.clean import CleaningOptions, clean_dataset
from ..data.load import load_from_config
from ..errors import InsufficientData
from ..utils.io import ensure_dirs, save_table
from .charts import plot_hour_density, plot_murders_by_region, plot_yearly_trend


@dataclass
class ReportResult:
    canonical: pd.DataFrame
    murders_by_region: pd.DataFrame
    yearly_by_region: pd.DataFrame
    hourly_counts: pd.DataFrame
    trend: Optional[TrendResult]
    n_quarantined: int
    tables: Dict[str, Path] = field(default_factory=dict)
    figures: Dict[str, Path] = field(default_factory=dict)


def build_report(
    config_path: str | os.PathLike | None = None,
    source: str | os.PathLike | None = None,
) -> ReportResult:
    cfg = load_config(config_path)
    out_root = Path(cfg["paths"]["outputs"])
    tabs_dir = out_root / "tables"
    figs_dir = out_root / "figs"
    ensure_dirs(tabs_dir, figs_dir)

    raw = load_from_config(cfg, source)
    cleaned = clean_dataset(raw, CleaningOptions.from_config(cfg))
    canonical = cleaned.canonical
    print(f"Canonical rows: {len(canonical)}  quarantined: {cleaned.n_quarantined}")

    by_region = murders_by_region(canonical)
    yearly = yearly_by_region(canonical)
    hourly = hourly_counts(canonical)

    trend: Optional[TrendResult]
    try:
        trend = fit_trend(yearly)
    except InsufficientData as err:
        print(f"⚠ Trend skipped: {err}")
        trend = None

    tables = {
        "murders_by_region": save_table(by_region, tabs_dir / "murders_by_region.csv"),
        "yearly_by_region": save_table(yearly, tabs_dir / "yearly_by_region.csv"),
        "hourly_counts": save_table(hourly, tabs_dir / "hourly_counts.csv"),
    }
    if trend is not None:
        tables["trend_coefficients"] = save_table(
            trend.coefficients, tabs_dir / "trend_coefficients.csv"
        )
    if cleaned.n_quarantined:
        tables["quarantined_rows"] = save_table(
            cleaned.quarantined, tabs_dir / "quarantined_rows.csv"
        )

    figures = {
        "murders_by_region": plot_murders_by_region(by_region, figs_dir / "murders_by_region.png"),
        "yearly_trend": plot_yearly_trend(yearly, trend, figs_dir / "yearly_trend.png"),
        "hour_density": plot_hour_density(canonical, figs_dir / "hour_density.png"),
    }

    print("\n=== SHOOTING INCIDENT REPORT ===")
    print(by_region.to_string(index=False))
    if trend is not None:
        print(
            f"Trend: slope={trend.slope:+.2f}/yr  R2={trend.r_squared:.3f}  "
            f"ref={trend.reference_region}  n={trend.n_obs}"
        )
    if cleaned.n_quarantined:
        print(f"⚠ {cleaned.n_quarantined} rows quarantined → {tables['quarantined_rows']}")
    for name, path in {**tables, **figures}.items():
        print(f"Saved {name:<20} → {path}")

    return ReportResult(
        canonical=canonical,
        murders_by_region=by_region,
        yearly_by_region=yearly,
        hourly_counts=hourly,
        trend=trend,
        n_quarantined=cleaned.n_quarantined,
        tables=tables,
        figures=figures,
    )


__all__ = ["build_report", "ReportResult"]
