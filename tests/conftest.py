"""Shared fixtures."""

import matplotlib
matplotlib.use("Agg")

import pytest

from sudoku_game.core import PuzzleGrid
from sudoku_game.generator import PuzzleGenerator
from sudoku_game.session import RecordStore

SOLVED = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def solved_string():
    return SOLVED


@pytest.fixture
def empty_grid():
    return PuzzleGrid.empty()


@pytest.fixture
def generator():
    return PuzzleGenerator(seed=42)


@pytest.fixture
def record_store(tmp_path):
    return RecordStore(str(tmp_path / "records.json"))


@pytest.fixture
def clock():
    return FakeClock()
