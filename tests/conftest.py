import itertools

import pytest


class ConstRng:
    """Random source that always returns the same draw."""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


class CycleRng:
    """Random source that cycles through a fixed list of draws."""

    def __init__(self, values):
        self._it = itertools.cycle(values)

    def random(self) -> float:
        return next(self._it)


@pytest.fixture
def const_rng():
    return ConstRng


@pytest.fixture
def cycle_rng():
    return CycleRng
