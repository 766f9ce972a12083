"""
avellaneda.py

Inventory-skew quoting model in the spirit of Avellaneda–Stoikov.

This is the simplified version used by the teaching demo, not the full
closed-form solution:

    inventory_skew = q * gamma * sigma * skew_multiplier
    r_t            = S_t - inventory_skew
    half_spread    = sigma * spread_multiplier
    bid / ask      = r_t -/+ half_spread

Long inventory (q > 0) pushes r_t below mid so we sell more readily;
short inventory pushes it above mid.

skew_multiplier (5) and spread_multiplier (0.8) are visual scaling
constants, not physical parameters.
"""

from __future__ import annotations

from .config import SimulationConfig
from .types import QuoteSet


DEFAULT_SKEW_MULTIPLIER = 5.0
DEFAULT_SPREAD_MULTIPLIER = 0.8


# ================================================================
# === Formula components =========================================
# ================================================================

def inventory_skew(
    q: float,
    gamma: float,
    sigma: float,
    skew_multiplier: float = DEFAULT_SKEW_MULTIPLIER,
) -> float:
    return q * gamma * sigma * skew_multiplier


def reservation_price(
    S: float,
    q: float,
    gamma: float,
    sigma: float,
    skew_multiplier: float = DEFAULT_SKEW_MULTIPLIER,
) -> float:
    """
    Compute: r_t = S_t - q * gamma * sigma * skew_multiplier
    """
    return S - inventory_skew(q, gamma, sigma, skew_multiplier)


def half_spread(sigma: float, spread_multiplier: float = DEFAULT_SPREAD_MULTIPLIER) -> float:
    """
    Stand-in for the optimal-spread formula: wider vol -> wider quotes.
    """
    return sigma * spread_multiplier


def compute_quotes(
    S: float,
    q: float,
    gamma: float,
    sigma: float,
    skew_multiplier: float = DEFAULT_SKEW_MULTIPLIER,
    spread_multiplier: float = DEFAULT_SPREAD_MULTIPLIER,
) -> QuoteSet:
    skew = inventory_skew(q, gamma, sigma, skew_multiplier)
    r_t = S - skew
    delta = half_spread(sigma, spread_multiplier)
    return QuoteSet(
        reservation_price=r_t,
        bid=r_t - delta,
        ask=r_t + delta,
        half_spread=delta,
        inventory_skew=skew,
    )


# ================================================================
# === Strategy Class =============================================
# ================================================================

class InventorySkewQuoter:
    """
    Binds the model constants from a SimulationConfig.

    gamma and sigma are passed per call because they can change between
    ticks while the simulation runs.
    """

    def __init__(
        self,
        skew_multiplier: float = DEFAULT_SKEW_MULTIPLIER,
        spread_multiplier: float = DEFAULT_SPREAD_MULTIPLIER,
    ):
        self.skew_multiplier = skew_multiplier
        self.spread_multiplier = spread_multiplier

    @classmethod
    def from_config(cls, cfg: SimulationConfig) -> "InventorySkewQuoter":
        return cls(
            skew_multiplier=cfg.skew_multiplier,
            spread_multiplier=cfg.spread_multiplier,
        )

    def compute_quotes(self, S: float, q: float, gamma: float, sigma: float) -> QuoteSet:
        return compute_quotes(
            S=S,
            q=q,
            gamma=gamma,
            sigma=sigma,
            skew_multiplier=self.skew_multiplier,
            spread_multiplier=self.spread_multiplier,
        )
