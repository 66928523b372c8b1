import os
import random

# pygame must never try to open a real window under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from src.snake.config import Config
from src.snake.game import GameEngine
from src.snake.storage import HighScoreStore


class FakeClock:
    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_engine(clock):
    def _make(store=None, seed=7, **cfg_kwargs):
        cfg = Config(seed=seed, scores_path=None, **cfg_kwargs)
        return GameEngine(cfg, store=store, rng=random.Random(seed), clock=clock)
    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()


@pytest.fixture
def store(tmp_path):
    return HighScoreStore(tmp_path / "best.json")
