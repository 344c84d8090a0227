from __future__ import annotations

import os
from pathlib import Path
from typing import Dict

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from ..config import load_config
from ..utils.io import ensure_dirs, savefig
from .load import load_from_config
from .schema import REGION_COL


def missing_value_counts(df: pd.DataFrame, sentinel: str = "(null)") -> pd.Series:
    """Counts true missing values plus the literal sentinel, per column."""
    counts: Dict[str, int] = {}
    for col in df.columns:
        text = df[col].astype("string").str.strip()
        counts[col] = int((text.isna() | text.eq(sentinel)).fillna(True).sum())
    return pd.Series(counts, name="missing").sort_values(ascending=False)


def scan_dataset(
    config_path: str | os.PathLike | None = None,
    source: str | os.PathLike | None = None,
) -> Path:
    cfg = load_config(config_path)
    df = load_from_config(cfg, source)
    sentinel = cfg["cleaning"].get("null_sentinel", "(null)")

    out_root = Path(cfg["paths"]["outputs"])
    out_tabs = out_root / "tables"
    out_figs = out_root / "figs"
    ensure_dirs(out_tabs, out_figs)

    print("Shape:", df.shape)
    with open(out_tabs / "info.txt", "w") as f:
        df.info(buf=f)
    df.head(10).to_csv(out_tabs / "preview.csv", index=False)

    missing_value_counts(df, sentinel).to_csv(out_tabs / "missing_values.csv")

    dtypes = df.dtypes.astype(str).value_counts()
    dtypes.to_csv(out_tabs / "column_types.csv")

    regions = df[REGION_COL].astype("string").fillna("UNKNOWN")
    regions.value_counts(dropna=False).to_csv(out_tabs / "region_counts.csv")
    plt.figure()
    sns.countplot(x=regions.astype(str))
    plt.xticks(rotation=25)
    plt.title("Incidents per borough")
    savefig(out_figs / "region_balance.png")

    print(f"✓ Scan complete.\nTables → {out_tabs}\nFigs → {out_figs}")
    return out_tabs


__all__ = ["scan_dataset", "missing_value_counts"]
