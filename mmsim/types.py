"""
types.py

Small value records shared by every layer of the simulator.

  * Side       - which of OUR quotes got hit
  * FillEvent  - one unit traded against one of our quotes
  * QuoteSet   - reservation price and the two quotes for a tick
  * Snapshot   - what gets appended to the history and published
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Side(Enum):
    # our bid was hit -> we BUY
    BID = "bid"
    # our ask was lifted -> we SELL
    ASK = "ask"


@dataclass(frozen=True)
class FillEvent:
    """
    A fill against one of our quotes.

    side:   BID (we bought) or ASK (we sold)
    price:  the quote price we traded at
    size:   number of units (always 1 in the default config)
    """
    side: Side
    price: float
    size: int = 1


@dataclass(frozen=True)
class QuoteSet:
    """
    Output of the quoting model for one tick.

    bid <= reservation_price <= ask always holds when half_spread >= 0.
    """
    reservation_price: float
    bid: float
    ask: float
    half_spread: float
    inventory_skew: float

    @property
    def spread(self) -> float:
        return self.ask - self.bid


@dataclass(frozen=True)
class Snapshot:
    """
    State after one tick, as appended to the history and published.

    timestamp:  wall-clock seconds when the tick ran
    tick:       1-based tick number since the last reset
    inventory:  position after this tick's fills
    cash, pnl:  balance and mark-to-market PnL after those fills
    """
    timestamp: float
    tick: int
    mid_price: float
    reservation_price: float
    bid: float
    ask: float
    inventory: int
    cash: float
    pnl: float
