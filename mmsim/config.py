"""
config.py

Run configuration for the market-making simulation.

SimulationConfig carries:
  * the two strategy knobs the user plays with (gamma, sigma)
  * the clock settings (tick interval, history size)
  * the tunable model constants (skew / spread multipliers, fill decay,
    flow intensity)
  * the starting values used on construction and on reset
  * two optional extensions that are OFF by default:
      - min_price:     floor on the simulated mid price
      - max_inventory: cap on |inventory|

The object is frozen; use with_updates(...) to get a validated copy.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, replace
from typing import Optional

from .errors import InvalidParameter


def _is_real(value) -> bool:
    # numbers.Real covers numpy scalars and Fraction; bool is excluded
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_positive_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool) and value > 0


def _is_positive_finite(value) -> bool:
    if not _is_real(value):
        return False
    return math.isfinite(value) and value > 0


def validate_positive(name: str, value) -> float:
    """
    Boundary check used by the config and by the controller setters.
    Returns the value as a float.
    """
    if not _is_positive_finite(value):
        raise InvalidParameter(name, value)
    return float(value)


@dataclass(frozen=True)
class SimulationConfig:
    # --- strategy parameters ---
    risk_aversion: float = 0.1      # gamma
    volatility: float = 0.5         # sigma, price shock size and half-spread scale

    # --- clock ---
    tick_interval_ms: int = 50
    history_capacity: int = 60

    # --- model constants (visual scaling, not calibrated) ---
    skew_multiplier: float = 5.0
    spread_multiplier: float = 0.8
    decay_rate: float = 1.5
    flow_intensity: float = 0.3
    fill_size: int = 1

    # --- starting values ---
    initial_mid: float = 1000.0
    initial_cash: float = 10000.0

    # --- optional extensions ---
    min_price: Optional[float] = None
    max_inventory: Optional[int] = None

    # seed for the default numpy random source (None = OS entropy)
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        validate_positive("risk_aversion", self.risk_aversion)
        validate_positive("volatility", self.volatility)
        validate_positive("initial_mid", self.initial_mid)

        for name in ("tick_interval_ms", "history_capacity", "fill_size"):
            value = getattr(self, name)
            if not _is_positive_int(value):
                raise InvalidParameter(name, value, "must be a positive integer")

        for name in ("skew_multiplier", "spread_multiplier", "decay_rate"):
            value = getattr(self, name)
            if not _is_real(value) or not math.isfinite(value) or value < 0:
                raise InvalidParameter(name, value, "must be a non-negative finite number")

        if not _is_real(self.initial_cash) or not math.isfinite(self.initial_cash):
            raise InvalidParameter("initial_cash", self.initial_cash, "must be a finite number")

        intensity = self.flow_intensity
        if not _is_real(intensity) or not 0.0 <= intensity <= 1.0:
            raise InvalidParameter("flow_intensity", intensity, "must lie in [0, 1]")

        if self.min_price is not None:
            validate_positive("min_price", self.min_price)
        if self.max_inventory is not None:
            if not _is_positive_int(self.max_inventory):
                raise InvalidParameter("max_inventory", self.max_inventory, "must be a positive integer")

    def with_updates(self, **changes) -> "SimulationConfig":
        """
        Return a copy with some fields changed. The copy is validated on
        construction, so a bad value raises InvalidParameter and the
        original config stays in use.
        """
        return replace(self, **changes)

    @property
    def tick_interval_s(self) -> float:
        return self.tick_interval_ms / 1000.0
