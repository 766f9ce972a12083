import math

import pytest

from mmsim.execution import (
    fill_probabilities,
    hit_probability,
    limit_fills_to_inventory,
    simulate_fills,
)
from mmsim.types import FillEvent, Side


def test_fill_probabilities_decay_with_distance():
    p_bid, p_ask = fill_probabilities(mid=1000.0, bid=999.6, ask=1000.4)
    assert p_bid == pytest.approx(math.exp(-1.5 * 0.4))
    assert p_ask == pytest.approx(0.5488, abs=1e-4)

    near = hit_probability(0.1)
    far = hit_probability(2.0)
    assert 0.0 < far < near < 1.0


def test_probabilities_are_clamped():
    # quote through mid -> negative distance -> would exceed 1
    assert hit_probability(-5.0) == 1.0
    # absurd distances underflow / overflow
    assert hit_probability(1e6) == 0.0
    assert hit_probability(-1e6) == 1.0
    assert hit_probability(float("nan")) == 0.0


def test_midpoint_draws_produce_no_fills(const_rng):
    # threshold = 0.549 * 0.3 ~= 0.165 < 0.5
    fills = simulate_fills(1000.0, 999.6, 1000.4, const_rng(0.5))
    assert fills == []


def test_two_draws_per_call(const_rng):
    rng = const_rng(0.9)
    simulate_fills(1000.0, 999.6, 1000.4, rng)
    assert rng.calls == 2


def test_both_sides_can_fill(const_rng):
    fills = simulate_fills(1000.0, 999.6, 1000.4, const_rng(0.0))
    assert [f.side for f in fills] == [Side.ASK, Side.BID]
    assert fills[0].price == 1000.4
    assert fills[1].price == 999.6
    assert all(f.size == 1 for f in fills)


def test_sides_are_drawn_independently(cycle_rng):
    # first draw decides the ask, second the bid
    only_bid = simulate_fills(1000.0, 999.6, 1000.4, cycle_rng([0.99, 0.0]))
    assert [f.side for f in only_bid] == [Side.BID]

    only_ask = simulate_fills(1000.0, 999.6, 1000.4, cycle_rng([0.0, 0.99]))
    assert [f.side for f in only_ask] == [Side.ASK]


def test_flow_intensity_zero_never_fills(const_rng):
    assert simulate_fills(1000.0, 999.6, 1000.4, const_rng(0.0), flow_intensity=0.0) == []


def test_inventory_limit_drops_risk_increasing_fills():
    bid = FillEvent(Side.BID, 99.0)
    ask = FillEvent(Side.ASK, 101.0)

    # at the cap, a further buy is dropped but a sell is kept
    assert limit_fills_to_inventory([ask, bid], 10, 10) == [ask, bid]
    assert limit_fills_to_inventory([bid], 10, 10) == []
    assert limit_fills_to_inventory([ask], -10, 10) == []

    # no cap -> unchanged
    assert limit_fills_to_inventory([bid], 10_000, None) == [bid]
