import random

import pytest

from qix.config import GameConfig
from qix.engine import QixEngine, Scoreboard


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingScoreboard(Scoreboard):
    def __init__(self):
        self.counters = []
        self.game_overs = []

    def show_counters(self, score, lives, territory):
        self.counters.append((score, lives, territory))

    def show_game_over(self, score, territory):
        self.game_overs.append((score, territory))


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scoreboard():
    return RecordingScoreboard()


@pytest.fixture
def engine(config, clock, scoreboard):
    return QixEngine(config, scoreboard, rng=random.Random(1234), clock=clock)


@pytest.fixture
def running_engine(engine):
    """Started engine still inside its grace period."""
    engine.start()
    return engine


@pytest.fixture
def live_engine(engine, clock, config):
    """Started engine with the grace period already over."""
    engine.start()
    clock.advance(config.GRACE_PERIOD + 0.5)
    return engine
