"""Shared fixtures: a headless surface, scripted keys, predictable randomness."""
import io
import itertools
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cardodge.config import DEFAULT_PLAYFIELD
from cardodge.game import MIN_WIDTH, Game
from cardodge.screen import ConsoleSurface
from cardodge.stats import StatsLog


class ScriptedKeys:
    """poll_key() returns one scripted key per call, then None; wait_key() pops its own queue."""

    def __init__(self, polled=(), waited=()):
        self.polled = list(polled)
        self.waited = list(waited)

    def poll_key(self):
        if self.polled:
            return self.polled.pop(0)
        return None

    def wait_key(self):
        if self.waited:
            return self.waited.pop(0)
        return " "


class CyclingRandom:
    """Stand-in for random.Random that hands out offsets from a fixed cycle."""

    def __init__(self, values):
        self.values = itertools.cycle(values)
        self.calls = 0

    def randrange(self, n):
        self.calls += 1
        return next(self.values) % n


class Sleeper:
    def __init__(self):
        self.durations = []

    def __call__(self, seconds):
        self.durations.append(seconds)


@pytest.fixture
def surface():
    return ConsoleSurface(MIN_WIDTH, DEFAULT_PLAYFIELD.height, stream=io.StringIO())


@pytest.fixture
def sleeper():
    return Sleeper()


@pytest.fixture
def stats_log(tmp_path):
    return StatsLog(tmp_path / "data.txt")


@pytest.fixture
def make_game(surface, sleeper, stats_log):
    def _make(polled=(), waited=(), rng_values=(14, 24, 32), **kwargs):
        keys = ScriptedKeys(polled, waited)
        kwargs.setdefault("stats_log", stats_log)
        return Game(surface, keys, rng=CyclingRandom(rng_values), sleep=sleeper, **kwargs)

    return _make
