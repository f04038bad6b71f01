"""
Closed-form simple linear regression used by the simulation and unit tests.
No external deps beyond NumPy.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Sequence

import numpy as np

from olsdemo.utils.points import DataPoint


@dataclass(frozen=True)
class OLSResult:
    slope: float
    intercept: float
    r_squared: float
    slope_std_err: float    # SE of the slope, sigma estimated with n-2 df

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


ZERO_RESULT = OLSResult(slope=0.0, intercept=0.0, r_squared=0.0, slope_std_err=0.0)


def _finite_or_zero(value: float) -> float:
    value = float(value)
    return value if math.isfinite(value) else 0.0


def calculate_ols(points: Sequence[DataPoint]) -> OLSResult:
    """
    Fit y = intercept + slope*x over the whole point set (recomputed, not updated).

    - Fewer than 3 points or a constant x returns ZERO_RESULT.
    - R^2 is 0 when y has no variation.
    - Any non-finite field is replaced by 0 before returning, so callers
      never have to guard against NaN or inf.
    """
    n = len(points)
    if n < 3:
        return ZERO_RESULT

    x = np.fromiter((p.x for p in points), dtype=float, count=n)
    y = np.fromiter((p.y for p in points), dtype=float, count=n)

    # identical x values: no slope to estimate (rounding keeps the
    # denominator below from being exactly 0 for non-integer x)
    if np.ptp(x) == 0:
        return ZERO_RESULT

    with np.errstate(all="ignore"):
        # no y^2 sum: none of the outputs needs it
        sum_x = float(np.sum(x))
        sum_y = float(np.sum(y))
        sum_xy = float(np.sum(x * y))
        sum_xx = float(np.sum(x * x))

        denominator = n * sum_xx - sum_x * sum_x
        if denominator == 0:
            return ZERO_RESULT

        slope = (n * sum_xy - sum_x * sum_y) / denominator
        intercept = (sum_y - slope * sum_x) / n

        mean_y = sum_y / n
        ss_tot = float(np.sum((y - mean_y) ** 2))
        ss_res = float(np.sum((y - (slope * x + intercept)) ** 2))
        r_squared = 1.0 - ss_res / ss_tot if ss_tot != 0 else 0.0

        # Sxx = sum((x - mean_x)^2)
        sxx = sum_xx - (sum_x * sum_x) / n
        var_error = ss_res / (n - 2)
        slope_std_err = math.sqrt(var_error / sxx) if sxx > 0 else 0.0

    return OLSResult(
        slope=_finite_or_zero(slope),
        intercept=_finite_or_zero(intercept),
        r_squared=_finite_or_zero(r_squared),
        slope_std_err=_finite_or_zero(slope_std_err),
    )
