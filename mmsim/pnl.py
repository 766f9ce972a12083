"""
pnl.py

Portfolio ledger for the market maker.

  * PortfolioState  - inventory and cash, replaced (never mutated) per tick
  * StatsDelta      - what one tick adds to the running counters
  * Stats           - cumulative pnl / trades / volume, plus a split of the
                      PnL into:
                        - spread PnL     - edge captured vs mid on each fill
                        - inventory PnL  - price moves while holding inventory

pnl itself is always recomputed from scratch as mark-to-market minus the
starting cash, so the attribution never feeds back into it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from .types import FillEvent, Side


@dataclass(frozen=True)
class PortfolioState:
    """
    inventory: signed number of units held
    cash:      cash balance
    """
    inventory: int = 0
    cash: float = 0.0

    def mark_to_market(self, mid: float) -> float:
        """
        Mark-to-market value = cash + inventory * mid.
        """
        return self.cash + self.inventory * mid


@dataclass(frozen=True)
class StatsDelta:
    trades: int = 0
    volume: float = 0.0
    spread_pnl: float = 0.0


@dataclass(frozen=True)
class Stats:
    pnl: float = 0.0
    trades: int = 0
    volume: float = 0.0
    spread_pnl: float = 0.0
    inventory_pnl: float = 0.0

    def apply(self, delta: StatsDelta, pnl: float, inventory_pnl_step: float = 0.0) -> "Stats":
        return replace(
            self,
            pnl=pnl,
            trades=self.trades + delta.trades,
            volume=self.volume + delta.volume,
            spread_pnl=self.spread_pnl + delta.spread_pnl,
            inventory_pnl=self.inventory_pnl + inventory_pnl_step,
        )


def fill_spread_pnl(mid: float, fill: FillEvent) -> float:
    """
    Edge captured by a single fill relative to mid.

    Buying below mid or selling above mid is positive.
    """
    if fill.side is Side.BID:
        return (mid - fill.price) * fill.size
    return (fill.price - mid) * fill.size


def inventory_pnl_step(inventory_prev: int, mid_prev: Optional[float], mid_now: float) -> float:
    """
    PnL from holding inventory_prev while mid moved from mid_prev to mid_now.
    """
    if mid_prev is None:
        return 0.0
    return inventory_prev * (mid_now - mid_prev)


def apply_fills(
    portfolio: PortfolioState,
    fills: Iterable[FillEvent],
    mid: float,
    initial_cash: float,
) -> Tuple[PortfolioState, StatsDelta, float]:
    """
    Apply this tick's fills.

    ask fill: inventory -= size, cash += price * size
    bid fill: inventory += size, cash -= price * size

    Returns (new_portfolio, stats_delta, pnl). Volume accrues the mid price
    once per fill rather than the traded notional, matching the demo's
    counters.
    """
    inventory = portfolio.inventory
    cash = portfolio.cash
    n_fills = 0
    spread = 0.0

    for f in fills:
        if f.side is Side.ASK:
            inventory -= f.size
            cash += f.price * f.size
        else:
            inventory += f.size
            cash -= f.price * f.size
        spread += fill_spread_pnl(mid, f)
        n_fills += 1

    new_portfolio = PortfolioState(inventory=inventory, cash=cash)
    pnl = new_portfolio.mark_to_market(mid) - initial_cash

    delta = StatsDelta(
        trades=n_fills,
        volume=mid * n_fills,
        spread_pnl=spread,
    )
    return new_portfolio, delta, pnl
