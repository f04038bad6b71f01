#!/usr/bin/env python3
"""
Fast-fail sanity checks on the random-access generator and the normal sampler.

Usage:
  python scripts/rng_quality_checks.py
  python scripts/rng_quality_checks.py --seeds 1 42 1234 --draws 200000 --bins 200
"""
from __future__ import annotations

import argparse
import math
import sys
from typing import Iterable

import numpy as np
from scipy import stats

from olsdemo.utils.rng import random_normal, random_normal_array, seeded_random, seeded_random_array

# False alarm rate per check.
ALPHA = 1e-3


def chi_square_statistic(values: np.ndarray, bins: int) -> float:
    """Pearson statistic of ``values`` against equal-width bins on [0, 1)."""
    counts, _ = np.histogram(values, bins=bins, range=(0.0, 1.0))
    return float(stats.chisquare(counts).statistic)


def chi_square_critical(df: int, alpha: float = ALPHA) -> float:
    return float(stats.chi2.ppf(1.0 - alpha, df))


def check_uniform(seed: int, draws: int, bins: int, failures: list[str]) -> None:
    u = seeded_random_array(seed, np.arange(draws))
    if u.min() < 0.0 or u.max() >= 1.0:
        failures.append(f"seed={seed}: values outside [0, 1) (min={u.min()}, max={u.max()})")
    stat = chi_square_statistic(u, bins)
    crit = chi_square_critical(bins - 1)
    if stat > crit:
        failures.append(f"seed={seed}: chi-square {stat:.1f} > {crit:.1f} over {bins} bins")

    # the vectorised path must agree with the scalar reference
    spot_checks = np.linspace(0, draws - 1, num=min(draws, 50), dtype=np.int64)
    for i in spot_checks:
        if seeded_random(seed, int(i)) != u[i]:
            failures.append(f"seed={seed}: scalar/vector mismatch at index {int(i)}")
            break


def check_normal(seed: int, draws: int, failures: list[str]) -> None:
    z = random_normal_array(0.0, 1.0, seed, np.arange(draws))
    tol = float(stats.norm.ppf(1.0 - ALPHA)) * 2 / math.sqrt(draws) + 1e-3
    mean, sd = float(np.mean(z)), float(np.std(z, ddof=1))
    if abs(mean) > tol:
        failures.append(f"seed={seed}: normal mean {mean:.4f} outside ±{tol:.4f}")
    if abs(sd - 1.0) > tol:
        failures.append(f"seed={seed}: normal std {sd:.4f} outside 1±{tol:.4f}")
    if not math.isclose(random_normal(0.0, 1.0, seed, 0), float(z[0]), rel_tol=1e-12, abs_tol=1e-12):
        failures.append(f"seed={seed}: scalar/vector normal mismatch at index 0")


def run_checks(seeds: Iterable[int], draws: int, bins: int) -> list[str]:
    failures: list[str] = []
    for seed in seeds:
        check_uniform(seed, draws, bins, failures)
        check_normal(seed, draws, failures)
    return failures


def main() -> int:
    ap = argparse.ArgumentParser(description="Generator quality checks.")
    ap.add_argument("--seeds", type=int, nargs="+", default=[0, 1, 42, 2024])
    ap.add_argument("--draws", type=int, default=100_000)
    ap.add_argument("--bins", type=int, default=100)
    args = ap.parse_args()

    failures = run_checks(args.seeds, args.draws, args.bins)
    if failures:
        print("[rng-check] FAILED:", file=sys.stderr)
        for f in failures:
            print(f"  - {f}", file=sys.stderr)
        return 1
    print(f"[rng-check] OK: {len(args.seeds)} seeds x {args.draws:,} draws")
    return 0


if __name__ == "__main__":
    sys.exit(main())
