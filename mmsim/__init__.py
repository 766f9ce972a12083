"""
mmsim

Interactive Avellaneda–Stoikov market-making simulation engine.
"""

from .avellaneda import InventorySkewQuoter, compute_quotes, half_spread, reservation_price
from .config import SimulationConfig
from .controller import SimState, SimulationController
from .errors import InvalidParameter, SimulationError
from .execution import fill_probabilities, simulate_fills
from .history import HistoryBuffer
from .pnl import PortfolioState, Stats, apply_fills
from .scheduler import ManualScheduler, ThreadScheduler
from .simulator import RandomWalkPriceProcess, next_mid_price
from .types import FillEvent, QuoteSet, Side, Snapshot

__all__ = [
    "FillEvent",
    "HistoryBuffer",
    "InvalidParameter",
    "InventorySkewQuoter",
    "ManualScheduler",
    "PortfolioState",
    "QuoteSet",
    "RandomWalkPriceProcess",
    "Side",
    "SimState",
    "SimulationConfig",
    "SimulationController",
    "SimulationError",
    "Snapshot",
    "Stats",
    "ThreadScheduler",
    "apply_fills",
    "compute_quotes",
    "fill_probabilities",
    "half_spread",
    "next_mid_price",
    "reservation_price",
    "simulate_fills",
]
