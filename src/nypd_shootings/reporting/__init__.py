"""Charts and the end-to-end report run."""

from .charts import plot_hour_density, plot_murders_by_region, plot_yearly_trend
from .report import ReportResult, build_report

__all__ = [
    "plot_hour_density",
    "plot_murders_by_region",
    "plot_yearly_trend",
    "ReportResult",
    "build_report",
]
