from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from ..analysis.aggregate import COUNT_COL, HOUR_COL, PERCENT_COL, YEAR_COL, add_time_parts
from ..analysis.trend import TrendResult
from ..data.schema import MURDER_COL, REGION_COL
from ..utils.io import savefig

FLAG_LABELS = {True: "Murder", False: "Not murder"}


def _flag_label(value) -> str:
    if pd.isna(value):
        return "Unknown"
    return FLAG_LABELS[bool(value)]


def plot_murders_by_region(breakdown: pd.DataFrame, out_png: Path) -> Path:
    """Stacked bar of incidents per borough, split by murder flag, with share labels."""
    data = breakdown.copy()
    if data.empty:
        counts = shares = pd.DataFrame()
    else:
        data["flag"] = data[MURDER_COL].map(_flag_label)
        counts = data.pivot_table(index=REGION_COL, columns="flag", values=COUNT_COL, aggfunc="sum", fill_value=0)
        shares = data.pivot_table(index=REGION_COL, columns="flag", values=PERCENT_COL, aggfunc="sum", fill_value=0.0)

    fig, ax = plt.subplots(figsize=(8, 5))
    bottom = np.zeros(len(counts))
    x = np.arange(len(counts))
    palette = sns.color_palette("Set2", n_colors=max(len(counts.columns), 1))
    for color, flag in zip(palette, counts.columns):
        heights = counts[flag].to_numpy(dtype=float)
        ax.bar(x, heights, bottom=bottom, label=flag, color=color)
        for i, (h, pct) in enumerate(zip(heights, shares[flag].to_numpy(dtype=float))):
            if h > 0:
                ax.text(x[i], bottom[i] + h / 2, f"{pct:.1f}%", ha="center", va="center", fontsize=8)
        bottom += heights
    ax.set_xticks(x)
    ax.set_xticklabels(counts.index.astype(str), rotation=25)
    ax.set_ylabel("Shootings")
    ax.set_title("Shootings by borough")
    if len(counts.columns):
        ax.legend(title="Statistical murder flag")
    plt.tight_layout()
    return savefig(out_png)


def plot_yearly_trend(yearly: pd.DataFrame, trend: Optional[TrendResult], out_png: Path) -> Path:
    """Scatter of yearly counts per borough, with the fitted line when a trend is available."""
    plt.figure(figsize=(9, 5))
    regions = sorted(yearly[REGION_COL].astype(str).unique())
    palette = dict(zip(regions, sns.color_palette("tab10", n_colors=max(len(regions), 1))))
    for region in regions:
        sub = yearly[yearly[REGION_COL].astype(str) == region]
        plt.scatter(sub[YEAR_COL], sub[COUNT_COL], s=18, color=palette[region], label=region)
        if trend is not None and region in trend.region_intercepts:
            years = np.linspace(sub[YEAR_COL].min(), sub[YEAR_COL].max(), 50)
            plt.plot(years, trend.predict(years, region), color=palette[region], linewidth=1.2)
    plt.xlabel("Year")
    plt.ylabel("Shootings")
    title = "Yearly shootings by borough"
    if trend is not None:
        title += f" (slope {trend.slope:+.1f}/yr, R²={trend.r_squared:.2f})"
    plt.title(title)
    if regions:
        plt.legend(fontsize=8)
    plt.tight_layout()
    return savefig(out_png)


def plot_hour_density(canonical: pd.DataFrame, out_png: Path) -> Path:
    """Density of incidents over the hour of day (0–23)."""
    hours = add_time_parts(canonical)[HOUR_COL]
    plt.figure(figsize=(8, 4))
    if hours.nunique() > 1:
        sns.kdeplot(x=hours.astype(float), clip=(0, 23), fill=True)
    else:
        sns.histplot(x=hours, bins=24, binrange=(0, 24), stat="density")
    plt.xlim(0, 23)
    plt.xticks(range(0, 24, 2))
    plt.xlabel("Hour of day")
    plt.ylabel("Density")
    plt.title("Shootings by time of day")
    plt.tight_layout()
    return savefig(out_png)


__all__ = ["plot_murders_by_region", "plot_yearly_trend", "plot_hour_density"]
