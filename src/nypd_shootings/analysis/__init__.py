"""Grouped aggregations and the yearly trend model."""

from .aggregate import (
    add_time_parts,
    hourly_counts,
    murders_by_region,
    yearly_by_region,
)
from .trend import TrendResult, fit_trend

__all__ = [
    "add_time_parts",
    "hourly_counts",
    "murders_by_region",
    "yearly_by_region",
    "TrendResult",
    "fit_trend",
]
