import threading
import time

from mmsim.config import SimulationConfig
from mmsim.controller import SimulationController
from mmsim.scheduler import ManualScheduler, ThreadScheduler


def test_manual_scheduler_fires_per_period():
    sched = ManualScheduler()
    calls = []
    sched.schedule(lambda: calls.append("a"), 100)
    sched.schedule(lambda: calls.append("b"), 50)

    assert sched.advance(100) == 3
    assert calls.count("a") == 1
    assert calls.count("b") == 2


def test_manual_cancel():
    sched = ManualScheduler()
    calls = []
    handle = sched.schedule(lambda: calls.append(1), 10)
    handle.cancel()

    assert handle.cancelled
    assert sched.advance(1000) == 0
    assert sched.run_pending(3) == 0
    assert calls == []


def test_thread_scheduler_ticks_and_cancels():
    ticked = threading.Event()
    calls = []

    def cb():
        calls.append(time.monotonic())
        ticked.set()

    handle = ThreadScheduler().schedule(cb, 10)
    assert ticked.wait(2.0)
    handle.cancel()
    n = len(calls)

    time.sleep(0.1)
    assert len(calls) == n
    assert handle.cancelled


def test_thread_scheduler_survives_callback_error():
    calls = []

    def cb():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("first call fails")

    handle = ThreadScheduler().schedule(cb, 5)
    deadline = time.monotonic() + 2.0
    while len(calls) < 3 and time.monotonic() < deadline:
        time.sleep(0.01)
    handle.cancel()
    assert len(calls) >= 3


def test_controller_on_real_clock_stops_cleanly():
    ctrl = SimulationController(SimulationConfig(tick_interval_ms=5, seed=3))
    got = threading.Event()
    published = []

    def on_tick(snap, stats):
        published.append(snap.tick)
        if snap.tick >= 3:
            got.set()

    ctrl.subscribe(on_tick)
    ctrl.start()
    assert got.wait(2.0)
    ctrl.stop()
    n = len(published)

    time.sleep(0.05)
    assert len(published) == n
    assert not ctrl.is_running


def test_stop_from_inside_tick_on_real_clock():
    ctrl = SimulationController(SimulationConfig(tick_interval_ms=5, seed=3))
    published = []
    done = threading.Event()

    def on_tick(snap, stats):
        published.append(snap.tick)
        ctrl.stop()
        done.set()

    ctrl.subscribe(on_tick)
    ctrl.start()
    assert done.wait(2.0)
    time.sleep(0.05)
    assert published == [1]


def test_cancel_without_wait_returns_while_callback_runs():
    entered = threading.Event()
    release = threading.Event()

    def cb():
        entered.set()
        release.wait(2.0)

    handle = ThreadScheduler().schedule(cb, 1)
    assert entered.wait(2.0)

    handle.cancel(wait=False)
    assert handle.cancelled
    release.set()


def test_observer_stop_during_manual_tick_with_live_timer():
    """
    tick() called by hand from a worker thread; its observer stops the
    controller while the timer thread is blocked waiting to tick.
    """
    ctrl = SimulationController(SimulationConfig(tick_interval_ms=1, seed=3))
    published = []
    done = threading.Event()

    def on_tick(snap, stats):
        published.append(snap.tick)
        if threading.current_thread().name == "manual-ticker":
            # let the timer thread queue up on the controller lock
            time.sleep(0.05)
            ctrl.stop()

    ctrl.subscribe(on_tick)
    ctrl.start()

    def worker():
        ctrl.tick()
        done.set()

    threading.Thread(target=worker, name="manual-ticker", daemon=True).start()
    assert done.wait(3.0)
    assert not ctrl.is_running

    n = len(published)
    time.sleep(0.05)
    assert len(published) == n
