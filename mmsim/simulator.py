"""
simulator.py

Synthetic price process for the market-making simulation.

The mid price follows a driftless discrete random walk:

    S_{t+1} = S_t + sigma * U,    U ~ Uniform[-1, 1)

There is no floor by default. An optional min_price clamps the result
from below (one variant of the demo floors at 100).
"""

from __future__ import annotations

from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """Anything with a random() -> float in [0, 1). numpy Generators qualify."""

    def random(self) -> float:
        ...


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def next_mid_price(
    mid: float,
    volatility: float,
    rng: RandomSource,
    min_price: Optional[float] = None,
) -> float:
    """
    Draw one step of the random walk.

    A draw of 0.5 gives a zero shock, so the price stays put.
    """
    u = 2.0 * float(rng.random()) - 1.0
    new_mid = mid + volatility * u
    if min_price is not None and new_mid < min_price:
        new_mid = min_price
    return new_mid


class RandomWalkPriceProcess:
    """
    Thin object wrapper around next_mid_price() so the controller can hold
    the floor setting in one place.
    """

    def __init__(self, min_price: Optional[float] = None):
        self.min_price = min_price

    def next(self, mid: float, volatility: float, rng: RandomSource) -> float:
        return next_mid_price(mid, volatility, rng, min_price=self.min_price)
