import random

import pytest

from core.game import GameEngine
from core.round_factory import RoundFactory
from core.scheduler import DeferredScheduler


class FakeClock:
    """Manually advanced clock, callable like time.monotonic."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(clock):
    scheduler = DeferredScheduler(clock)
    return GameEngine(factory=RoundFactory(random.Random(1234)), scheduler=scheduler, clock=clock)


@pytest.fixture
def events(engine):
    received = []
    engine.subscribe(received.append)
    return received
