from __future__ import annotations

from typing import Dict, List

import pandas as pd

from ..errors import SourceUnavailable

DATE_COL = "OCCUR_DATE"
TIME_COL = "OCCUR_TIME"
REGION_COL = "BORO"
MURDER_COL = "STATISTICAL_MURDER_FLAG"
TIMESTAMP_COL = "OCCUR_DATETIME"

COORDINATE_COLUMNS: List[str] = [
    "X_COORD_CD",
    "Y_COORD_CD",
    "Latitude",
    "Longitude",
    "Lon_Lat",
]

REQUIRED_COLUMNS: List[str] = [DATE_COL, TIME_COL, REGION_COL, MURDER_COL]

# Declared type per column. Columns absent from this mapping are read as text.
RAW_SCHEMA: Dict[str, str] = {
    "INCIDENT_KEY": "integer",
    DATE_COL: "date",
    TIME_COL: "time",
    REGION_COL: "text",
    "LOC_OF_OCCUR_DESC": "text",
    "PRECINCT": "integer",
    "JURISDICTION_CODE": "integer",
    "LOC_CLASSFCTN_DESC": "text",
    "LOCATION_DESC": "text",
    MURDER_COL: "logical",
    "PERP_AGE_GROUP": "text",
    "PERP_SEX": "text",
    "PERP_RACE": "text",
    "VIC_AGE_GROUP": "text",
    "VIC_SEX": "text",
    "VIC_RACE": "text",
    "X_COORD_CD": "number",
    "Y_COORD_CD": "number",
    "Latitude": "number",
    "Longitude": "number",
    "Lon_Lat": "text",
}

LOGICAL_VALUES: Dict[str, bool] = {
    "true": True,
    "false": False,
    "t": True,
    "f": False,
    "y": True,
    "n": False,
    "yes": True,
    "no": False,
    "1": True,
    "0": False,
}


def declared_type(col: str) -> str:
    return RAW_SCHEMA.get(col, "text")


def _to_number(series: pd.Series) -> pd.Series:
    text = series.astype("string").str.replace(",", "", regex=False).str.strip()
    return pd.to_numeric(text, errors="coerce")


def _to_integer(series: pd.Series, col: str) -> pd.Series:
    numeric = _to_number(series)
    fractional = numeric.notna() & (numeric % 1 != 0)
    if fractional.any():
        sample = series[fractional].head(3).tolist()
        raise SourceUnavailable(f"Column '{col}' declared integer but holds {sample}")
    return numeric.astype("Int64")


def _to_logical(series: pd.Series, col: str) -> pd.Series:
    text = series.astype("string").str.strip().str.lower()
    unknown = text.notna().to_numpy(dtype=bool) & ~text.isin(list(LOGICAL_VALUES)).to_numpy(dtype=bool)
    if unknown.any():
        sample = series[unknown].drop_duplicates().head(3).tolist()
        raise SourceUnavailable(f"Column '{col}' declared logical but holds {sample}")
    out = pd.Series(pd.NA, index=series.index, dtype="boolean")
    for key, flag in LOGICAL_VALUES.items():
        out[text.eq(key).fillna(False).to_numpy(dtype=bool)] = flag
    return out


def apply_schema(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validates required columns and converts each column to its declared type.
    Date and time columns stay as text; parsing them is the cleaner's job.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise SourceUnavailable(f"Dataset is missing required columns: {missing}")

    out = {}
    for col in df.columns:
        kind = declared_type(col)
        if kind == "integer":
            out[col] = _to_integer(df[col], col)
        elif kind == "number":
            out[col] = _to_number(df[col])
        elif kind == "logical":
            out[col] = _to_logical(df[col], col)
        else:
            out[col] = df[col].astype("string")
    return pd.DataFrame(out, index=df.index)


__all__ = [
    "DATE_COL",
    "TIME_COL",
    "REGION_COL",
    "MURDER_COL",
    "TIMESTAMP_COL",
    "COORDINATE_COLUMNS",
    "REQUIRED_COLUMNS",
    "RAW_SCHEMA",
    "declared_type",
    "apply_schema",
]
