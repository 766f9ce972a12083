"""
run_mm_sim.py

End-to-end demo:
  * SimulationController ticks on a wall-clock timer
  * each tick: random-walk mid -> inventory-skewed quotes -> fills -> ledger
  * a console observer prints one line per tick

--headless single-steps the controller on a ManualScheduler instead of
waiting on the real clock.
"""

from __future__ import annotations

import argparse
import logging
import threading

from mmsim.config import SimulationConfig
from mmsim.controller import SimulationController
from mmsim.pnl import Stats
from mmsim.scheduler import ManualScheduler, ThreadScheduler
from mmsim.types import Snapshot


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run the inventory-skew market-making simulation.")
    p.add_argument("--ticks", type=int, default=50)
    p.add_argument("--gamma", type=float, default=0.1, help="risk aversion")
    p.add_argument("--sigma", type=float, default=0.5, help="volatility")
    p.add_argument("--interval-ms", type=int, default=50)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--min-price", type=float, default=None, help="optional price floor")
    p.add_argument("--max-inventory", type=int, default=None, help="optional |inventory| cap")
    p.add_argument("--headless", action="store_true", help="step without waiting on the clock")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = SimulationConfig(
        risk_aversion=args.gamma,
        volatility=args.sigma,
        tick_interval_ms=args.interval_ms,
        seed=args.seed,
        min_price=args.min_price,
        max_inventory=args.max_inventory,
    )
    scheduler = ManualScheduler() if args.headless else ThreadScheduler()
    ctrl = SimulationController(cfg, scheduler=scheduler)

    done = threading.Event()

    print("tick      mid      res      bid      ask   inv       cash       pnl  trades")
    print("-" * 78)

    def on_tick(snap: Snapshot, stats: Stats) -> None:
        print(
            f"{snap.tick:4d}  "
            f"{snap.mid_price:7.3f}  "
            f"{snap.reservation_price:7.3f}  "
            f"{snap.bid:7.3f}  "
            f"{snap.ask:7.3f}  "
            f"{snap.inventory:4d}  "
            f"{snap.cash:9.2f}  "
            f"{stats.pnl:8.3f}  "
            f"{stats.trades:6d}"
        )
        if snap.tick >= args.ticks:
            done.set()

    ctrl.subscribe(on_tick)
    ctrl.start()

    if args.headless:
        scheduler.run_pending(args.ticks)
    else:
        # generous upper bound in case ticks run slower than the interval
        done.wait(timeout=args.ticks * args.interval_ms / 1000.0 * 4 + 1.0)
    ctrl.stop()

    stats = ctrl.stats
    print("-" * 78)
    print(f"Final PnL      : {stats.pnl:10.3f}")
    print(f"  spread PnL   : {stats.spread_pnl:10.3f}")
    print(f"  inventory PnL: {stats.inventory_pnl:10.3f}")
    print(f"Trades         : {stats.trades:10d}")
    print(f"Volume         : {stats.volume:10.2f}")
    print(f"Inventory      : {ctrl.portfolio.inventory:10d}")


if __name__ == "__main__":
    main()
