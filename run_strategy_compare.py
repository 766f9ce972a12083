"""
run_strategy_compare.py

Compare inventory-skew quoting at several risk-aversion levels.

We run many headless simulation paths for each gamma and report:
  * Mean final PnL
  * Std of final PnL
  * Sharpe (mean / std of step PnL)
  * Max drawdown (average over runs)
  * Average |inventory| over time
"""

from __future__ import annotations

import argparse
import logging

import numpy as np

from mmsim.config import SimulationConfig
from mmsim.controller import SimulationController
from mmsim.scheduler import ManualScheduler


# ---------- helper to run ONE path for a given gamma ----------

def run_single_path(gamma: float, sigma: float, n_steps: int, seed: int = 0):
    """
    Returns:
      dict with final_pnl, sharpe, max_drawdown, avg_abs_inventory
    """
    if n_steps < 1:
        raise ValueError(f"n_steps must be >= 1, got {n_steps}")
    cfg = SimulationConfig(
        risk_aversion=gamma,
        volatility=sigma,
        history_capacity=n_steps,
        seed=seed,
    )
    ctrl = SimulationController(cfg, scheduler=ManualScheduler())

    pnls = []
    abs_inv = []
    for _ in range(n_steps):
        snap = ctrl.tick()
        pnls.append(snap.pnl)
        abs_inv.append(abs(snap.inventory))

    pnls = np.asarray(pnls, dtype=float)
    abs_inv = np.asarray(abs_inv, dtype=float)

    rets = np.diff(np.concatenate(([0.0], pnls)))
    if rets.std() > 0:
        sharpe = rets.mean() / rets.std() * np.sqrt(len(rets))
    else:
        sharpe = 0.0

    running_max = np.maximum.accumulate(np.concatenate(([0.0], pnls)))
    max_dd = (np.concatenate(([0.0], pnls)) - running_max).min()

    return {
        "final_pnl": pnls[-1],
        "sharpe": sharpe,
        "max_drawdown": max_dd,
        "avg_abs_inventory": abs_inv.mean(),
    }


def positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def summarize(results, name: str):
    final_pnls = np.array([r["final_pnl"] for r in results])
    sharpes = np.array([r["sharpe"] for r in results])
    max_dds = np.array([r["max_drawdown"] for r in results])
    avg_abs_inv = np.array([r["avg_abs_inventory"] for r in results])

    print(f"\n===== {name} =====")
    print(f"# paths: {len(results)}")
    print(f"Mean final PnL      : {final_pnls.mean():8.3f}")
    print(f"Std final PnL       : {final_pnls.std():8.3f}")
    print(f"Mean Sharpe         : {sharpes.mean():8.3f}")
    print(f"Mean max drawdown   : {max_dds.mean():8.3f}")
    print(f"Mean |inv| over time: {avg_abs_inv.mean():8.3f}")


# ---------- main experiment --------------------------------------

def run_experiment(gammas, sigma: float = 0.5, n_paths: int = 50, n_steps: int = 500):
    for gamma in gammas:
        results = [
            run_single_path(gamma, sigma, n_steps=n_steps, seed=1234 + i)
            for i in range(n_paths)
        ]
        summarize(results, f"gamma={gamma:g}, sigma={sigma:g}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Compare risk-aversion levels.")
    parser.add_argument("--gammas", type=float, nargs="+", default=[0.01, 0.1, 0.5])
    parser.add_argument("--sigma", type=float, default=0.5)
    parser.add_argument("--paths", type=positive_int, default=50)
    parser.add_argument("--steps", type=positive_int, default=500)
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)
    run_experiment(args.gammas, sigma=args.sigma, n_paths=args.paths, n_steps=args.steps)
