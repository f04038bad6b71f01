"""Deterministic data generation and OLS estimation."""
from olsdemo.utils.config import SimulationParams
from olsdemo.utils.ols import OLSResult, calculate_ols
from olsdemo.utils.points import DataPoint, generate_points
from olsdemo.utils.rng import random_normal, seeded_random

__all__ = [
    "DataPoint",
    "OLSResult",
    "SimulationParams",
    "calculate_ols",
    "generate_points",
    "random_normal",
    "seeded_random",
]
