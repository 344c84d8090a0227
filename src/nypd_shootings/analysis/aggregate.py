from __future__ import annotations

import pandas as pd

from ..data.schema import MURDER_COL, REGION_COL, TIMESTAMP_COL

YEAR_COL = "YEAR"
HOUR_COL = "HOUR"
COUNT_COL = "count"
PERCENT_COL = "percent"


def add_time_parts(df: pd.DataFrame) -> pd.DataFrame:
    """Returns a copy with YEAR and HOUR taken from the local timestamp."""
    if TIMESTAMP_COL not in df.columns:
        raise ValueError(f"Column '{TIMESTAMP_COL}' not found; clean the dataset first.")
    out = df.copy()
    ts = out[TIMESTAMP_COL]
    out[YEAR_COL] = ts.dt.year.astype(int)
    out[HOUR_COL] = ts.dt.hour.astype(int)
    return out


def murders_by_region(df: pd.DataFrame) -> pd.DataFrame:
    """
    Counts incidents per (region, murder flag) and each group's share of its
    region's total, in percent.
    """
    counts = (
        df.groupby([REGION_COL, MURDER_COL], dropna=False, observed=True)
        .size()
        .reset_index(name=COUNT_COL)
    )
    totals = counts.groupby(REGION_COL, dropna=False)[COUNT_COL].transform("sum")
    counts[PERCENT_COL] = counts[COUNT_COL] / totals * 100.0
    return counts.sort_values([REGION_COL, MURDER_COL]).reset_index(drop=True)


def yearly_by_region(df: pd.DataFrame) -> pd.DataFrame:
    parts = add_time_parts(df)
    counts = (
        parts.groupby([YEAR_COL, REGION_COL], dropna=False, observed=True)
        .size()
        .reset_index(name=COUNT_COL)
    )
    return counts.sort_values([YEAR_COL, REGION_COL]).reset_index(drop=True)


def hourly_counts(df: pd.DataFrame) -> pd.DataFrame:
    parts = add_time_parts(df)
    counts = parts.groupby(HOUR_COL).size().reset_index(name=COUNT_COL)
    return counts.sort_values(HOUR_COL).reset_index(drop=True)


__all__ = [
    "add_time_parts",
    "murders_by_region",
    "yearly_by_region",
    "hourly_counts",
    "YEAR_COL",
    "HOUR_COL",
    "COUNT_COL",
    "PERCENT_COL",
]
