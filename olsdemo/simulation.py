"""
Tick-by-tick driver for the consistency demo.

The driver owns all mutable state: the current sample, the latest fit, the
history of estimates and the running flag. Everything it calls in
``olsdemo.utils`` is a pure function of its arguments.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Optional

import pandas as pd

from olsdemo.utils.config import SimulationParams
from olsdemo.utils.ols import ZERO_RESULT, OLSResult, calculate_ols
from olsdemo.utils.points import DataPoint, generate_points

logger = logging.getLogger(__name__)

# Changing any of these makes the existing sample belong to a different model.
RESET_FIELDS = frozenset(
    {"seed", "true_slope", "true_intercept", "noise_level", "sampling_mode", "min_sample_size"}
)


@dataclass(frozen=True)
class HistoryPoint:
    n: int
    estimated_slope: float
    estimated_intercept: float
    slope_std_err: float


class Simulation:
    def __init__(self, params: Optional[SimulationParams] = None):
        self.params = (params or SimulationParams()).validated()
        self.data: list[DataPoint] = []
        self.ols: OLSResult = ZERO_RESULT
        self.history: list[HistoryPoint] = []
        self.running = False
        self.tick_count = 0
        self._next_free_id = 0
        self.reset()

    @property
    def n(self) -> int:
        return len(self.data)

    @property
    def finished(self) -> bool:
        return self.n >= self.params.max_sample_size

    def reset(self) -> None:
        """Stop and start over from a fresh sample of ``min_sample_size`` points."""
        self.running = False
        self.tick_count = 0
        self.data = generate_points(self.params.min_sample_size, 0, self.params)
        self._next_free_id = self.n
        self.history = []
        self._refit()
        logger.info(
            "reset: seed=%s n=%d mode=%s", self.params.seed, self.n, self.params.sampling_mode
        )

    def start(self) -> None:
        if not self.finished:
            self.running = True

    def stop(self) -> None:
        self.running = False

    def step(self) -> bool:
        """
        Advance one tick: draw the next batch, refit, record one history entry.

        Returns False (and stops) once the sample has reached max_sample_size.
        """
        p = self.params
        current_n = self.n
        if current_n >= p.max_sample_size:
            self.running = False
            logger.info("finished at n=%d after %d ticks", current_n, self.tick_count)
            return False

        next_n = min(current_n + p.batch_size, p.max_sample_size)
        self.tick_count += 1
        if p.sampling_mode == "cumulative":
            self.data = self.data + generate_points(next_n - current_n, current_n, p)
        else:
            # Fresh sample from ids never handed out before in this run.
            self.data = generate_points(next_n, self._next_free_id, p)
            self._next_free_id += next_n

        self._refit()
        logger.debug("tick %d: n=%d slope=%.4f", self.tick_count, self.n, self.ols.slope)
        return True

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Step until finished (or ``max_ticks`` ticks); returns the number of ticks taken."""
        self.start()
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            if not self.step():
                break
            ticks += 1
        self.stop()
        return ticks

    def update_params(self, **changes: Any) -> SimulationParams:
        """
        Apply new parameters. Model or seed changes reset the sample; pacing
        changes (batch size, speed, max size) keep it.
        """
        new = self.params.replace(**changes).validated()
        changed = {f.name for f in fields(new) if getattr(new, f.name) != getattr(self.params, f.name)}
        self.params = new
        if changed & RESET_FIELDS:
            logger.info("parameters changed (%s), resetting", ", ".join(sorted(changed)))
            self.reset()
        elif self.finished:
            self.running = False
        return new

    def history_frame(self) -> pd.DataFrame:
        cols = [f.name for f in fields(HistoryPoint)]
        return pd.DataFrame([asdict(h) for h in self.history], columns=cols)

    def _refit(self) -> None:
        self.ols = calculate_ols(self.data)
        self.history.append(
            HistoryPoint(
                n=self.n,
                estimated_slope=self.ols.slope,
                estimated_intercept=self.ols.intercept,
                slope_std_err=self.ols.slope_std_err,
            )
        )
