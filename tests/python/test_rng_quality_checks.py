import importlib.util
from pathlib import Path

import numpy as np
import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "rng_quality_checks.py"


@pytest.fixture(scope="module")
def checks():
    spec = importlib.util.spec_from_file_location("rng_quality_checks", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_statistic_flags_a_skewed_sample(checks):
    flat = np.linspace(0, 1, 10_000, endpoint=False)
    assert checks.chi_square_statistic(flat, 10) == pytest.approx(0.0, abs=0.01)
    skewed = flat ** 2
    assert checks.chi_square_statistic(skewed, 10) > checks.chi_square_critical(9)


def test_generator_passes(checks):
    assert checks.run_checks([0, 42], draws=20_000, bins=50) == []
