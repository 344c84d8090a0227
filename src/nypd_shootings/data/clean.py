from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np
import pandas as pd

from ..errors import MalformedDate, MalformedTime
from .schema import (
    COORDINATE_COLUMNS,
    DATE_COL,
    TIME_COL,
    TIMESTAMP_COL,
    declared_type,
)

DATE_FORMAT = "%m/%d/%Y"
TIME_FORMAT = "%H:%M:%S"
REASON_COL = "QUARANTINE_REASON"
MALFORMED_POLICIES = ("quarantine", "raise")


@dataclass(frozen=True)
class CleaningOptions:
    timezone: str = "America/New_York"
    null_sentinel: str = "(null)"
    unknown_label: str = "UNKNOWN"
    on_malformed: str = "quarantine"

    def __post_init__(self):
        if self.on_malformed not in MALFORMED_POLICIES:
            raise ValueError(
                f"on_malformed must be one of {MALFORMED_POLICIES}, got '{self.on_malformed}'"
            )

    @staticmethod
    def from_config(cfg: Dict[str, Any]) -> "CleaningOptions":
        section = cfg.get("cleaning") or {}
        defaults = CleaningOptions()
        return CleaningOptions(
            timezone=str(section.get("timezone", defaults.timezone)),
            null_sentinel=str(section.get("null_sentinel", defaults.null_sentinel)),
            unknown_label=str(section.get("unknown_label", defaults.unknown_label)),
            on_malformed=str(section.get("on_malformed", defaults.on_malformed)),
        )


@dataclass
class CleanResult:
    canonical: pd.DataFrame
    quarantined: pd.DataFrame

    @property
    def n_quarantined(self) -> int:
        return int(len(self.quarantined))


def is_canonical(df: pd.DataFrame) -> bool:
    return TIMESTAMP_COL in df.columns and DATE_COL not in df.columns


def _is_null(series: pd.Series, sentinel: str) -> pd.Series:
    text = series.astype("string").str.strip()
    return (text.isna() | text.eq("") | text.eq(sentinel)).fillna(True).astype(bool)


def _parse_dates(df: pd.DataFrame, opts: CleaningOptions) -> Tuple[pd.Series, pd.Series]:
    raw = df[DATE_COL].astype("string").str.strip()
    parsed = pd.to_datetime(raw, format=DATE_FORMAT, errors="coerce")
    bad = (_is_null(df[DATE_COL], opts.null_sentinel) | parsed.isna()).astype(bool)
    return parsed, bad


def _parse_times(df: pd.DataFrame, opts: CleaningOptions) -> Tuple[pd.Series, pd.Series]:
    raw = df[TIME_COL].astype("string").str.strip()
    parsed = pd.to_datetime(raw, format=TIME_FORMAT, errors="coerce")
    offset = parsed - parsed.dt.normalize()
    bad = (_is_null(df[TIME_COL], opts.null_sentinel) | parsed.isna()).astype(bool)
    return offset, bad


def _split_malformed(
    df: pd.DataFrame, bad_date: pd.Series, bad_time: pd.Series, opts: CleaningOptions
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    if opts.on_malformed == "raise":
        if bad_date.any():
            raise MalformedDate(df.index[bad_date.to_numpy()].tolist(), DATE_COL)
        if bad_time.any():
            raise MalformedTime(df.index[bad_time.to_numpy()].tolist(), TIME_COL)

    reason = pd.Series(pd.NA, index=df.index, dtype="string")
    reason[bad_time] = "malformed_time"
    reason[bad_date] = "malformed_date"
    mask = reason.notna()
    quarantined = df.loc[mask].copy()
    quarantined[REASON_COL] = reason[mask]
    return df.loc[~mask].copy(), quarantined


def _coerce_text(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    for col in df.columns:
        if declared_type(col) in {"date", "time", "logical"}:
            continue
        df[col] = df[col].astype("string")
    return df


def _combine_timestamp(
    df: pd.DataFrame, dates: pd.Series, offsets: pd.Series, opts: CleaningOptions
) -> pd.DataFrame:
    df = df.copy()
    naive = dates.loc[df.index] + offsets.loc[df.index]
    # Fall-back hour resolves to the daylight-saving occurrence.
    df[TIMESTAMP_COL] = naive.dt.tz_localize(
        opts.timezone,
        ambiguous=np.ones(len(naive), dtype=bool),
        nonexistent="shift_forward",
    )
    return df


def _drop_columns(df: pd.DataFrame) -> pd.DataFrame:
    drop = [c for c in COORDINATE_COLUMNS + [DATE_COL, TIME_COL] if c in df.columns]
    return df.drop(columns=drop)


def _fill_unknown(df: pd.DataFrame, opts: CleaningOptions) -> pd.DataFrame:
    df = df.copy()
    for col in df.columns:
        if not isinstance(df[col].dtype, pd.StringDtype):
            continue
        mask = _is_null(df[col], opts.null_sentinel)
        df[col] = df[col].mask(mask, opts.unknown_label)
    return df


def clean_dataset(raw: pd.DataFrame, options: CleaningOptions | None = None) -> CleanResult:
    """
    Turns schema-typed raw records into canonical records.

    Rows whose date or time cannot be parsed never reach the canonical table:
    they are either returned in ``quarantined`` with a reason, or raised as
    MalformedDate/MalformedTime, depending on ``options.on_malformed``.
    Cleaning an already canonical table returns a copy unchanged.
    """
    opts = options or CleaningOptions()
    if is_canonical(raw):
        return CleanResult(canonical=raw.copy(), quarantined=raw.iloc[0:0].copy())

    dates, bad_date = _parse_dates(raw, opts)
    offsets, bad_time = _parse_times(raw, opts)
    kept, quarantined = _split_malformed(raw, bad_date, bad_time, opts)

    df = _coerce_text(kept)
    df = _combine_timestamp(df, dates, offsets, opts)
    df = _drop_columns(df)
    df = _fill_unknown(df, opts)
    df = df.reset_index(drop=True)

    return CleanResult(canonical=df, quarantined=quarantined)


__all__ = [
    "CleaningOptions",
    "CleanResult",
    "clean_dataset",
    "is_canonical",
    "REASON_COL",
]
