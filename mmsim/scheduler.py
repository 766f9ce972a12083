"""
scheduler.py

Periodic timer capability used by the controller.

    schedule(callback, period_ms) -> CancelHandle

Two implementations:
  * ThreadScheduler  - real wall-clock timer on a daemon thread
  * ManualScheduler  - deterministic, advanced by hand (tests, headless runs)

Once CancelHandle.cancel() returns, the callback will not start again.
cancel(wait=False) does not wait for a callback that is already running.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class CancelHandle(Protocol):
    def cancel(self, wait: bool = True) -> None:
        ...

    @property
    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    def schedule(self, callback: Callback, period_ms: int) -> CancelHandle:
        ...


# ---------- wall-clock scheduler ----------

class _ThreadTimer:
    def __init__(self, callback: Callback, period_ms: int, name: str):
        self._callback = callback
        self._period_s = period_ms / 1000.0
        self._stop = threading.Event()
        # held while the callback runs so cancel() can wait it out
        self._running = threading.Lock()
        self._thread = threading.Thread(target=self._loop, name=name, daemon=True)
        self._thread.start()

    def _loop(self) -> None:
        while not self._stop.wait(self._period_s):
            with self._running:
                if self._stop.is_set():
                    break
                try:
                    self._callback()
                except Exception:
                    logger.exception("scheduled callback failed")

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    def cancel(self, wait: bool = True) -> None:
        """
        wait=False only signals the loop; a callback already running is not
        waited for. Used when the caller holds a lock that callback needs.
        """
        self._stop.set()
        if not wait or threading.current_thread() is self._thread:
            # the loop sees the event and exits after any callback in flight
            return
        # wait out a callback that is already running
        with self._running:
            pass
        self._thread.join()


class ThreadScheduler:
    """
    Calls the callback every period_ms on a daemon thread.

    The loop waits on an Event rather than sleeping, so cancel() wakes it
    immediately instead of waiting for the period to elapse.
    """

    def __init__(self, name: str = "mmsim-ticker"):
        self.name = name

    def schedule(self, callback: Callback, period_ms: int) -> _ThreadTimer:
        return _ThreadTimer(callback, period_ms, self.name)


# ---------- deterministic scheduler ----------

class _ManualTimer:
    def __init__(self, callback: Callback, period_ms: int):
        self.callback = callback
        self.period_ms = period_ms
        self.elapsed_ms = 0
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self, wait: bool = True) -> None:
        self._cancelled = True


class ManualScheduler:
    """
    Nothing happens until the test calls advance() or run_pending().

    advance(ms) fires each live timer once per full period that elapses;
    run_pending(n) fires every live timer n times regardless of period.
    """

    def __init__(self) -> None:
        self.timers: List[_ManualTimer] = []

    def schedule(self, callback: Callback, period_ms: int) -> _ManualTimer:
        timer = _ManualTimer(callback, period_ms)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> List[_ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, ms: int) -> int:
        """
        Move the clock forward by ms. Returns the number of callbacks fired.
        """
        fired = 0
        for timer in list(self.timers):
            if timer.cancelled:
                continue
            timer.elapsed_ms += ms
            while timer.elapsed_ms >= timer.period_ms and not timer.cancelled:
                timer.elapsed_ms -= timer.period_ms
                timer.callback()
                fired += 1
        return fired

    def run_pending(self, n: int = 1) -> int:
        fired = 0
        for _ in range(n):
            for timer in list(self.timers):
                if timer.cancelled:
                    continue
                timer.callback()
                fired += 1
        return fired
