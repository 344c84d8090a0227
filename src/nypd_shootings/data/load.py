from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Any, Dict

import pandas as pd
import requests

from ..errors import SourceUnavailable
from .schema import apply_schema

DEFAULT_SOURCE_URL = (
    "https://data.cityofnewyork.us/api/views/833y-fsy8/rows.csv?accessType=DOWNLOAD"
)
DEFAULT_TIMEOUT = 60.0


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def _fetch_text(url: str, timeout: float) -> str:
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.exceptions.HTTPError as err:
        code = err.response.status_code if err.response is not None else "?"
        raise SourceUnavailable(f"HTTP {code} while fetching {url}") from err
    except requests.exceptions.RequestException as err:
        raise SourceUnavailable(f"Could not reach {url}: {err}") from err
    return r.text


def _read_table(buf: Any, label: str) -> pd.DataFrame:
    try:
        df = pd.read_csv(buf, dtype=str)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as err:
        raise SourceUnavailable(f"Could not parse {label} as delimited text: {err}") from err
    except OSError as err:
        raise SourceUnavailable(f"Could not open {label}: {err}") from err
    if df.empty:
        raise SourceUnavailable(f"{label} contains no rows")
    df.columns = [str(c).strip() for c in df.columns]
    return df


def load_dataset(
    source: str | os.PathLike = DEFAULT_SOURCE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> pd.DataFrame:
    """
    Reads the incident table from a URL or local CSV path and applies the
    declared column schema. Any failure surfaces as SourceUnavailable.
    """
    src = str(source)
    if _is_url(src):
        text = _fetch_text(src, timeout)
        df = _read_table(io.StringIO(text), src)
    else:
        path = Path(src)
        if not path.exists():
            raise SourceUnavailable(f"Dataset not found at '{path}'")
        df = _read_table(path, str(path))
    return apply_schema(df)


def load_from_config(cfg: Dict[str, Any], source: str | os.PathLike | None = None) -> pd.DataFrame:
    data_cfg = cfg.get("data", {})
    src = source or data_cfg.get("source_url", DEFAULT_SOURCE_URL)
    timeout = float(data_cfg.get("timeout_seconds", DEFAULT_TIMEOUT))
    df = load_dataset(src, timeout=timeout)
    print(f"Loaded {len(df)} rows × {df.shape[1]} columns from {src}")
    return df


__all__ = ["load_dataset", "load_from_config", "DEFAULT_SOURCE_URL", "DEFAULT_TIMEOUT"]
