"""
Linear trend of yearly incident counts.

The model is ordinary least squares ``count ~ year + region``: year enters as
a continuous predictor, region as a categorical one. The alphabetically first
region is the reference level absorbed into the intercept; every other region
gets an additive offset, so all regions share one slope.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf

from ..data.schema import REGION_COL
from ..errors import InsufficientData
from .aggregate import COUNT_COL, YEAR_COL

INTERCEPT_TERM = "Intercept"


@dataclass
class TrendResult:
    reference_region: str
    regions: List[str]
    slope: float
    region_intercepts: Dict[str, float]
    coefficients: pd.DataFrame
    r_squared: float
    adj_r_squared: float
    n_obs: int
    df_resid: int
    fitted: pd.DataFrame = field(repr=False)

    def predict(self, years: Iterable[float], region: str) -> np.ndarray:
        if region not in self.region_intercepts:
            raise KeyError(f"Region '{region}' was not part of the fit.")
        yrs = np.asarray(list(years), dtype=float)
        return self.region_intercepts[region] + self.slope * yrs


def _term_name(term: str) -> str:
    prefix = f"C({REGION_COL})[T."
    if term.startswith(prefix) and term.endswith("]"):
        return f"{REGION_COL}[{term[len(prefix):-1]}]"
    return term


def fit_trend(yearly: pd.DataFrame) -> TrendResult:
    """
    Fits ``count ~ year + region`` on the yearly-by-region table and returns
    per-region intercepts, the common slope and the usual fit statistics
    (R², coefficient standard errors and two-sided p-values).
    """
    missing = {YEAR_COL, REGION_COL, COUNT_COL} - set(yearly.columns)
    if missing:
        raise ValueError(f"Yearly table is missing columns: {sorted(missing)}")

    data = yearly.dropna(subset=[YEAR_COL, COUNT_COL]).reset_index(drop=True)
    data[REGION_COL] = data[REGION_COL].astype(str)
    data[YEAR_COL] = data[YEAR_COL].astype(float)
    data[COUNT_COL] = data[COUNT_COL].astype(float)
    regions = sorted(data[REGION_COL].unique())
    n_obs = len(data)
    n_params = 2 + max(len(regions) - 1, 0)

    if n_obs < n_params:
        raise InsufficientData(
            f"{n_obs} observations for {n_params} parameters; cannot fit the trend."
        )
    if data[YEAR_COL].nunique() < 2:
        raise InsufficientData("Trend needs at least two distinct years.")
    if n_obs - n_params < 1:
        raise InsufficientData(
            f"{n_obs} observations for {n_params} parameters leaves no residual degrees of freedom."
        )

    formula = f"{COUNT_COL} ~ {YEAR_COL}" + (f" + C({REGION_COL})" if len(regions) > 1 else "")
    res = smf.ols(formula, data=data).fit()
    # df_model excludes the intercept
    if int(round(res.df_model)) + 1 < n_params:
        raise InsufficientData("Year and region are collinear in the yearly table.")

    coefficients = pd.DataFrame(
        {
            "term": [_term_name(t) for t in res.params.index],
            "estimate": res.params.to_numpy(),
            "std_error": res.bse.to_numpy(),
            "t_value": res.tvalues.to_numpy(),
            "p_value": res.pvalues.to_numpy(),
        }
    )

    base = float(res.params[INTERCEPT_TERM])
    intercepts = {regions[0]: base}
    for region in regions[1:]:
        intercepts[region] = base + float(res.params[f"C({REGION_COL})[T.{region}]"])

    fitted = data[[YEAR_COL, REGION_COL, COUNT_COL]].copy()
    fitted["fitted"] = res.fittedvalues.to_numpy()

    return TrendResult(
        reference_region=regions[0],
        regions=regions,
        slope=float(res.params[YEAR_COL]),
        region_intercepts=intercepts,
        coefficients=coefficients,
        r_squared=float(res.rsquared),
        adj_r_squared=float(res.rsquared_adj),
        n_obs=int(res.nobs),
        df_resid=int(res.df_resid),
        fitted=fitted,
    )


__all__ = ["fit_trend", "TrendResult", "INTERCEPT_TERM"]
