"""
history.py

Bounded window of recent snapshots, oldest first. Only used for display.
"""

from __future__ import annotations

import numbers
from collections import deque
from typing import Deque, Iterator, List, Optional

from .errors import InvalidParameter
from .types import Snapshot


class HistoryBuffer:
    """
    Fixed-capacity FIFO. Appending to a full buffer evicts the oldest
    snapshot first (strict sliding window, no decimation).
    """

    def __init__(self, capacity: int = 60) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, numbers.Integral) or capacity <= 0:
            raise InvalidParameter("history_capacity", capacity, "must be a positive integer")
        self._items: Deque[Snapshot] = deque(maxlen=int(capacity))

    @property
    def capacity(self) -> int:
        return self._items.maxlen  # type: ignore[return-value]

    def append(self, snapshot: Snapshot) -> None:
        self._items.append(snapshot)

    def snapshots(self) -> List[Snapshot]:
        """
        Copy of the window, most recent last.
        """
        return list(self._items)

    def latest(self) -> Optional[Snapshot]:
        return self._items[-1] if self._items else None

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(list(self._items))
