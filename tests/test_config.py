import math
from fractions import Fraction

import numpy as np
import pytest

from mmsim.config import SimulationConfig, validate_positive
from mmsim.errors import InvalidParameter


def test_defaults():
    cfg = SimulationConfig()
    assert cfg.risk_aversion == 0.1
    assert cfg.volatility == 0.5
    assert cfg.history_capacity == 60
    assert cfg.initial_mid == 1000.0
    assert cfg.initial_cash == 10000.0
    assert cfg.skew_multiplier == 5.0
    assert cfg.spread_multiplier == 0.8
    assert cfg.decay_rate == 1.5
    assert cfg.flow_intensity == 0.3
    assert cfg.min_price is None
    assert cfg.max_inventory is None
    assert cfg.tick_interval_s == 0.05


@pytest.mark.parametrize("value", [0.0, -0.1, math.nan, math.inf, -math.inf, "0.1", None])
def test_bad_strategy_params_rejected(value):
    with pytest.raises(InvalidParameter):
        SimulationConfig(risk_aversion=value)
    with pytest.raises(InvalidParameter):
        SimulationConfig(volatility=value)


@pytest.mark.parametrize(
    "field, value",
    [
        ("tick_interval_ms", 0),
        ("tick_interval_ms", 12.5),
        ("history_capacity", -3),
        ("fill_size", 0),
        ("flow_intensity", 1.5),
        ("flow_intensity", -0.1),
        ("decay_rate", -1.0),
        ("min_price", 0.0),
        ("max_inventory", 0),
        ("initial_cash", math.nan),
    ],
)
def test_other_fields_validated(field, value):
    with pytest.raises(InvalidParameter) as exc:
        SimulationConfig(**{field: value})
    assert exc.value.name == field


def test_out_of_ui_range_values_are_accepted():
    # the core does not clamp to the slider range
    cfg = SimulationConfig(risk_aversion=5.0, volatility=25.0)
    assert cfg.risk_aversion == 5.0


def test_with_updates_returns_new_config():
    cfg = SimulationConfig()
    new = cfg.with_updates(volatility=1.2)

    assert new.volatility == 1.2
    assert cfg.volatility == 0.5
    with pytest.raises(InvalidParameter):
        cfg.with_updates(volatility=-1.0)


def test_invalid_parameter_is_value_error():
    with pytest.raises(ValueError):
        validate_positive("volatility", math.nan)


@pytest.mark.parametrize("value", [np.float32(0.7), np.float64(0.7), np.int64(2), Fraction(7, 10)])
def test_numeric_types_accepted(value):
    cfg = SimulationConfig(risk_aversion=value, volatility=value)
    assert cfg.volatility == value
    assert validate_positive("volatility", value) == float(value)


def test_numpy_integers_accepted_for_integer_fields():
    cfg = SimulationConfig(
        tick_interval_ms=np.int64(20),
        history_capacity=np.int32(10),
        max_inventory=np.int64(5),
    )
    assert cfg.tick_interval_ms == 20
    assert cfg.history_capacity == 10


@pytest.mark.parametrize("field", ["risk_aversion", "volatility", "history_capacity"])
def test_bool_rejected(field):
    with pytest.raises(InvalidParameter):
        SimulationConfig(**{field: True})
