"""
Simulation parameters and their YAML defaults.

config/config.yaml may carry a ``simulation:`` block; any key left out keeps
the dataclass default. The estimation core reads these values as-is; checking
them is the job of :meth:`SimulationParams.validated`, called by the driver
and the front ends.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

CONFIG_PATH = Path("config/config.yaml")
SAMPLING_MODES = ("cumulative", "independent")
# Upper bounds shared with the sidebar widgets.
MAX_SPEED_MS = 1000
MAX_SAMPLE_SIZE = 50_000

INT_FIELDS = ("batch_size", "speed_ms", "min_sample_size", "max_sample_size", "seed")
FLOAT_FIELDS = ("true_slope", "true_intercept", "noise_level")


@dataclass(frozen=True)
class SimulationParams:
    true_slope: float = 1.5
    true_intercept: float = 2.0
    noise_level: float = 2.0
    batch_size: int = 1           # points added per tick
    speed_ms: int = 50            # delay between ticks
    min_sample_size: int = 10
    max_sample_size: int = 2000
    sampling_mode: str = "cumulative"
    seed: int = 42

    def replace(self, **changes: Any) -> "SimulationParams":
        return dataclasses.replace(self, **changes)

    def validated(self) -> "SimulationParams":
        """Return self, or raise ValueError naming the first bad field."""
        for name in INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer (got {value!r})")
        if self.noise_level < 0:
            raise ValueError(f"noise_level must be >= 0 (got {self.noise_level})")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1 (got {self.batch_size})")
        if not 0 <= self.speed_ms <= MAX_SPEED_MS:
            raise ValueError(f"speed_ms must be between 0 and {MAX_SPEED_MS} (got {self.speed_ms})")
        if not 1 <= self.max_sample_size <= MAX_SAMPLE_SIZE:
            raise ValueError(f"max_sample_size must be between 1 and {MAX_SAMPLE_SIZE} (got {self.max_sample_size})")
        if not 0 <= self.min_sample_size <= self.max_sample_size:
            raise ValueError(
                "min_sample_size must be between 0 and max_sample_size "
                f"(got {self.min_sample_size} / {self.max_sample_size})"
            )
        if self.sampling_mode not in SAMPLING_MODES:
            raise ValueError(f"sampling_mode must be one of {SAMPLING_MODES} (got {self.sampling_mode!r})")
        return self


def load_cfg(path: Path | str = CONFIG_PATH) -> dict:
    path = Path(path)
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_params(path: Path | str = CONFIG_PATH) -> SimulationParams:
    """Defaults from the ``simulation:`` block of the YAML config; unknown keys are ignored."""
    block = load_cfg(path).get("simulation") or {}
    known = {f.name for f in fields(SimulationParams)}
    values = {k: _coerce(k, v) for k, v in block.items() if k in known}
    return SimulationParams(**values)


def _coerce(name: str, value: Any) -> Any:
    """YAML scalars to the field's type; 42.0 becomes 42, 42.5 is rejected."""
    if name in INT_FIELDS:
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an integer (got {value!r})")
        return value
    if name in FLOAT_FIELDS:
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ValueError(f"{name} must be a number (got {value!r})") from None
    return value
