"""Synthetic observations from the true model y = b0 + b1*x + e."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np
import pandas as pd

from olsdemo.utils.rng import random_normal_array, seeded_random_array

if TYPE_CHECKING:
    from olsdemo.utils.config import SimulationParams

# Point id -> RNG slots: x uses 100*id, the error term uses normal index
# 100*id + 1, i.e. uniform slots 200*id + 2 and 200*id + 3.
SLOTS_PER_POINT = 100
X_RANGE = 10.0


@dataclass(frozen=True)
class DataPoint:
    id: int
    x: float
    y: float


def generate_points(count: int, start_id: int, params: SimulationParams) -> list[DataPoint]:
    """
    Points with ids start_id .. start_id + count - 1.

    Each point depends only on (seed, id, model params), so any id can be
    regenerated on its own and ranges can be produced in any order.
    """
    if count <= 0:
        return []
    ids = np.arange(start_id, start_id + count, dtype=np.int64)
    x = seeded_random_array(params.seed, ids * SLOTS_PER_POINT) * X_RANGE
    error = random_normal_array(0.0, params.noise_level, params.seed, ids * SLOTS_PER_POINT + 1)
    y = params.true_intercept + params.true_slope * x + error
    return [DataPoint(id=int(i), x=float(xi), y=float(yi)) for i, xi, yi in zip(ids, x, y)]


def points_frame(points: Sequence[DataPoint]) -> pd.DataFrame:
    """Tabular view of the points for charts and downloads."""
    return pd.DataFrame(
        {
            "id": [p.id for p in points],
            "x": [p.x for p in points],
            "y": [p.y for p in points],
        },
        columns=["id", "x", "y"],
    )
