"""
controller.py

Simulation controller: owns the clock, the config and every piece of
mutable simulation state, and runs the per-tick pipeline:

    price process -> quoting model -> fill model -> ledger -> history

then publishes the new snapshot and stats to observers.

State machine:
    IDLE --start()--> RUNNING --stop()--> IDLE
    reset() is allowed in both states and does not change the state.

Parameter changes are accepted at any time and apply from the next tick.
The config is copied once at tick entry, so a tick never sees a
half-applied update.
"""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Callable, List, Optional

from .avellaneda import InventorySkewQuoter
from .config import SimulationConfig, validate_positive
from .execution import limit_fills_to_inventory, simulate_fills
from .history import HistoryBuffer
from .pnl import PortfolioState, Stats, apply_fills, inventory_pnl_step
from .scheduler import CancelHandle, Scheduler, ThreadScheduler
from .simulator import RandomSource, RandomWalkPriceProcess, make_rng
from .types import QuoteSet, Snapshot

logger = logging.getLogger(__name__)

Observer = Callable[[Snapshot, Stats], None]


class SimState(Enum):
    IDLE = "idle"
    RUNNING = "running"


class SimulationController:
    """
    Plain controller object; a UI is just an observer of what it publishes.

    scheduler: where the periodic tick comes from (ThreadScheduler by default,
               ManualScheduler for tests)
    rng:       random source with random() in [0, 1); defaults to a numpy
               Generator seeded from cfg.seed
    clock:     wall-clock function used for snapshot timestamps
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._config = config if config is not None else SimulationConfig()
        self._scheduler = scheduler if scheduler is not None else ThreadScheduler()
        self._rng = rng if rng is not None else make_rng(self._config.seed)
        self._rng_seed = self._config.seed
        self._clock = clock

        self._lock = threading.RLock()
        self._state = SimState.IDLE
        self._handle: Optional[CancelHandle] = None
        # ident of the thread currently inside tick(), if any
        self._ticking_thread: Optional[int] = None
        self._observers: List[Observer] = []

        self._history = HistoryBuffer(self._config.history_capacity)
        self._init_state()

    def _init_state(self) -> None:
        cfg = self._config
        self._mid = cfg.initial_mid
        self._portfolio = PortfolioState(inventory=0, cash=cfg.initial_cash)
        self._stats = Stats()
        self._tick_count = 0
        self._quotes: Optional[QuoteSet] = None
        self._latest: Optional[Snapshot] = None
        self._last_tick_ms = 0.0
        if cfg.seed != self._rng_seed:
            self._rng = make_rng(cfg.seed)
            self._rng_seed = cfg.seed
        if self._history.capacity != cfg.history_capacity:
            self._history = HistoryBuffer(cfg.history_capacity)
        else:
            self._history.clear()

    # -------- commands --------

    def start(self) -> None:
        with self._lock:
            if self._state is SimState.RUNNING:
                return
            self._state = SimState.RUNNING
            self._handle = self._scheduler.schedule(self._on_timer, self._config.tick_interval_ms)
        logger.info(
            "simulation started (gamma=%s, sigma=%s, interval=%dms)",
            self._config.risk_aversion, self._config.volatility, self._config.tick_interval_ms,
        )

    def stop(self) -> None:
        with self._lock:
            if self._state is SimState.IDLE:
                return
            self._state = SimState.IDLE
            handle, self._handle = self._handle, None
            # called from an observer inside tick(): the timer thread may be
            # blocked on our lock, so only signal it. _on_timer re-checks the
            # state under the lock before ticking.
            wait = self._ticking_thread != threading.get_ident()
        # cancel outside the lock: the timer may be waiting on it inside a tick
        if handle is not None:
            handle.cancel(wait=wait)
        logger.info("simulation stopped after %d ticks", self._tick_count)

    def reset(self) -> None:
        with self._lock:
            self._init_state()
        logger.info("simulation reset (running=%s)", self.is_running)

    # -------- parameter updates --------

    def set_risk_aversion(self, value: float) -> None:
        gamma = validate_positive("risk_aversion", value)
        self.update_config(risk_aversion=gamma)

    def set_volatility(self, value: float) -> None:
        sigma = validate_positive("volatility", value)
        self.update_config(volatility=sigma)

    def update_config(self, **changes) -> SimulationConfig:
        """
        Replace config fields. Applied from the next tick; a new
        tick_interval_ms takes effect on the next start(); a new
        history_capacity or seed on the next reset().
        """
        with self._lock:
            self._config = self._config.with_updates(**changes)
            cfg = self._config
        logger.info("config updated: %s", ", ".join(f"{k}={v!r}" for k, v in changes.items()))
        return cfg

    # -------- observers --------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register a callback receiving (snapshot, stats) once per tick.
        Returns a function that unsubscribes it.
        """
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def _publish(self, snapshot: Snapshot, stats: Stats) -> None:
        for observer in list(self._observers):
            try:
                observer(snapshot, stats)
            except Exception:
                logger.exception("observer %r failed", observer)

    # -------- tick pipeline --------

    def _on_timer(self) -> None:
        with self._lock:
            if self._state is not SimState.RUNNING:
                return
            self.tick()

    def tick(self) -> Snapshot:
        """
        Run one simulation step and publish the result.

        Timer ticks only call this while RUNNING; calling it directly
        single-steps the simulation in any state.
        """
        started = time.perf_counter()
        with self._lock:
            cfg = self._config
            rng = self._rng

            mid_prev = self._mid
            portfolio_prev = self._portfolio

            # 1) price process
            mid = RandomWalkPriceProcess(cfg.min_price).next(mid_prev, cfg.volatility, rng)

            # 2) quotes
            quoter = InventorySkewQuoter.from_config(cfg)
            quotes = quoter.compute_quotes(
                S=mid,
                q=portfolio_prev.inventory,
                gamma=cfg.risk_aversion,
                sigma=cfg.volatility,
            )

            # 3) fills
            fills = simulate_fills(
                mid=mid,
                bid=quotes.bid,
                ask=quotes.ask,
                rng=rng,
                decay_rate=cfg.decay_rate,
                flow_intensity=cfg.flow_intensity,
                size=cfg.fill_size,
            )
            fills = limit_fills_to_inventory(fills, portfolio_prev.inventory, cfg.max_inventory)

            # 4) ledger
            portfolio, delta, pnl = apply_fills(portfolio_prev, fills, mid, cfg.initial_cash)
            stats = self._stats.apply(
                delta,
                pnl=pnl,
                inventory_pnl_step=inventory_pnl_step(portfolio_prev.inventory, mid_prev, mid),
            )

            # 5) history
            self._tick_count += 1
            snapshot = Snapshot(
                timestamp=self._clock(),
                tick=self._tick_count,
                mid_price=mid,
                reservation_price=quotes.reservation_price,
                bid=quotes.bid,
                ask=quotes.ask,
                inventory=portfolio.inventory,
                cash=portfolio.cash,
                pnl=pnl,
            )
            self._history.append(snapshot)

            self._mid = mid
            self._quotes = quotes
            self._portfolio = portfolio
            self._stats = stats
            self._latest = snapshot

            logger.debug(
                "tick %d mid=%.4f r=%.4f bid=%.4f ask=%.4f inv=%d pnl=%.4f fills=%d",
                snapshot.tick, mid, quotes.reservation_price, quotes.bid, quotes.ask,
                portfolio.inventory, pnl, len(fills),
            )

            # observers run under our lock and may call stop()
            outer, self._ticking_thread = self._ticking_thread, threading.get_ident()
            try:
                self._publish(snapshot, stats)
            finally:
                self._ticking_thread = outer

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        self._last_tick_ms = elapsed_ms
        if elapsed_ms > cfg.tick_interval_ms:
            logger.warning(
                "slow tick %d: %.2fms exceeds %dms interval",
                snapshot.tick, elapsed_ms, cfg.tick_interval_ms,
            )
        return snapshot

    # -------- read surface --------

    @property
    def state(self) -> SimState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SimState.RUNNING

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def mid_price(self) -> float:
        return self._mid

    @property
    def portfolio(self) -> PortfolioState:
        return self._portfolio

    @property
    def stats(self) -> Stats:
        return self._stats

    @property
    def quotes(self) -> Optional[QuoteSet]:
        return self._quotes

    @property
    def latest_snapshot(self) -> Optional[Snapshot]:
        return self._latest

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def last_tick_ms(self) -> float:
        return self._last_tick_ms

    def history(self) -> List[Snapshot]:
        with self._lock:
            return self._history.snapshots()
