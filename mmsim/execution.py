"""
execution.py

Stylized fill model for our quotes.

There is no order book here. Each tick, the chance that market flow
reaches one of our quotes decays exponentially with its distance from mid:

    p_ask = exp(-k * (ask - S_t))
    p_bid = exp(-k * (S_t - bid))

Two independent uniform draws decide the fills:

    ask filled  <=>  u1 < p_ask * flow_intensity
    bid filled  <=>  u2 < p_bid * flow_intensity

so a tick can produce zero, one or two fills. flow_intensity throttles the
fill rate for visual pacing.

Optional risk control: limit_fills_to_inventory() drops fills that would
push |inventory| past a cap.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

from .simulator import RandomSource
from .types import FillEvent, Side

logger = logging.getLogger(__name__)

DEFAULT_DECAY_RATE = 1.5
DEFAULT_FLOW_INTENSITY = 0.3


def _clamp_probability(p: float) -> float:
    if math.isnan(p):
        return 0.0
    return max(0.0, min(1.0, p))


def hit_probability(distance: float, decay_rate: float = DEFAULT_DECAY_RATE) -> float:
    """
    exp(-k * distance), clamped to [0, 1].

    A quote on the wrong side of mid (negative distance) saturates at 1,
    a very distant quote underflows to 0.
    """
    try:
        p = math.exp(-decay_rate * distance)
    except OverflowError:
        p = 1.0
    return _clamp_probability(p)


def fill_probabilities(
    mid: float,
    bid: float,
    ask: float,
    decay_rate: float = DEFAULT_DECAY_RATE,
) -> Tuple[float, float]:
    """
    Returns (p_bid, p_ask) before flow_intensity is applied.
    """
    p_bid = hit_probability(mid - bid, decay_rate)
    p_ask = hit_probability(ask - mid, decay_rate)
    return p_bid, p_ask


def simulate_fills(
    mid: float,
    bid: float,
    ask: float,
    rng: RandomSource,
    decay_rate: float = DEFAULT_DECAY_RATE,
    flow_intensity: float = DEFAULT_FLOW_INTENSITY,
    size: int = 1,
) -> List[FillEvent]:
    """
    Draw the fills for one tick.

    Exactly two draws are taken every call (ask first, then bid), so a
    seeded run consumes the random stream at a fixed rate.
    """
    p_bid, p_ask = fill_probabilities(mid, bid, ask, decay_rate)
    threshold_ask = _clamp_probability(p_ask * flow_intensity)
    threshold_bid = _clamp_probability(p_bid * flow_intensity)

    u_ask = float(rng.random())
    u_bid = float(rng.random())

    fills: List[FillEvent] = []
    if u_ask < threshold_ask:
        fills.append(FillEvent(side=Side.ASK, price=ask, size=size))
    if u_bid < threshold_bid:
        fills.append(FillEvent(side=Side.BID, price=bid, size=size))

    for f in fills:
        logger.debug("fill %s %d @ %.4f (mid %.4f)", f.side.value, f.size, f.price, mid)
    return fills


def limit_fills_to_inventory(
    fills: List[FillEvent],
    inventory: int,
    max_inventory: Optional[int],
) -> List[FillEvent]:
    """
    Drop fills that would take |inventory| above max_inventory.

    Fills are considered in order, so an ask fill that reduces a long
    position can make room for the bid fill after it.
    """
    if max_inventory is None:
        return list(fills)

    kept: List[FillEvent] = []
    inv = inventory
    for f in fills:
        new_inv = inv + f.size if f.side is Side.BID else inv - f.size
        if abs(new_inv) > max_inventory and abs(new_inv) > abs(inv):
            logger.debug(
                "dropping %s fill: inventory %d would exceed cap %d",
                f.side.value, new_inv, max_inventory,
            )
            continue
        kept.append(f)
        inv = new_inv
    return kept
