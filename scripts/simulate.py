#!/usr/bin/env python3
"""
Run the consistency simulation headless and report where the estimates end up.

Usage:
  python scripts/simulate.py
  python scripts/simulate.py --seed 7 --max-n 20000 --batch 50 --mode independent
  python scripts/simulate.py --history artifacts/history.csv --plot artifacts/convergence.png
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

from olsdemo.simulation import Simulation  # noqa: E402
from olsdemo.utils.config import CONFIG_PATH, SAMPLING_MODES, SimulationParams, load_params  # noqa: E402


def eprint(*a, **k):
    print(*a, file=sys.stderr, **k)


def build_params(args: argparse.Namespace) -> SimulationParams:
    params = load_params(args.config)
    overrides = {
        "seed": args.seed,
        "true_slope": args.slope,
        "true_intercept": args.intercept,
        "noise_level": args.noise,
        "batch_size": args.batch,
        "min_sample_size": args.min_n,
        "max_sample_size": args.max_n,
        "sampling_mode": args.mode,
    }
    return params.replace(**{k: v for k, v in overrides.items() if v is not None}).validated()


def plot_convergence(hist: pd.DataFrame, params: SimulationParams, out: Path) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    panels = [
        ("estimated_intercept", "Conv. (β₀)", params.true_intercept, "#ec4899"),
        ("estimated_slope", "Conv. (β₁)", params.true_slope, "#4f46e5"),
        ("slope_std_err", "Slope Std. Error (SE)", 0.0, "#f59e0b"),
    ]
    fig, axes = plt.subplots(1, 3, figsize=(15, 4))
    for ax, (col, title, truth, color) in zip(axes, panels):
        ax.plot(hist["n"], hist[col], color=color)
        ax.axhline(truth, linestyle="--", color="#64748b")
        ax.set_title(title)
        ax.set_xlabel("n")
    fig.tight_layout()
    fig.savefig(out)
    plt.close(fig)
    print(f"[simulate] Wrote {out}")


def main() -> int:
    ap = argparse.ArgumentParser(description="Headless OLS consistency run.")
    ap.add_argument("--config", default=str(CONFIG_PATH))
    ap.add_argument("--seed", type=int)
    ap.add_argument("--slope", type=float)
    ap.add_argument("--intercept", type=float)
    ap.add_argument("--noise", type=float)
    ap.add_argument("--batch", type=int)
    ap.add_argument("--min-n", type=int)
    ap.add_argument("--max-n", type=int)
    ap.add_argument("--mode", choices=SAMPLING_MODES)
    ap.add_argument("--max-ticks", type=int, default=None)
    ap.add_argument("--history", type=Path, help="Write the estimate history as CSV")
    ap.add_argument("--plot", type=Path, help="Write convergence charts as PNG")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        params = build_params(args)
    except ValueError as exc:
        eprint(f"[simulate] Invalid parameters: {exc}")
        return 2

    sim = Simulation(params)
    ticks = sim.run(max_ticks=args.max_ticks)
    ols = sim.ols
    print(f"[simulate] mode={params.sampling_mode} seed={params.seed} ticks={ticks} n={sim.n:,}")
    print(f"[simulate] slope     {ols.slope:+.5f}  (true {params.true_slope:+.5f})")
    print(f"[simulate] intercept {ols.intercept:+.5f}  (true {params.true_intercept:+.5f})")
    print(f"[simulate] R²        {ols.r_squared:.5f}")
    print(f"[simulate] SE(slope) {ols.slope_std_err:.5f}")

    hist = sim.history_frame()
    if args.history:
        args.history.parent.mkdir(parents=True, exist_ok=True)
        hist.to_csv(args.history, index=False)
        print(f"[simulate] Wrote {args.history} ({len(hist):,} rows)")
    if args.plot:
        plot_convergence(hist, params, args.plot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
