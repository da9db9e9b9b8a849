import numpy as np
import pytest

from connectn.config import GameConfig
from connectn.debug import debug, DebugLevel
from connectn.game.board import Board
from connectn.game.engine import GameEngine
from connectn.utils import Player


@pytest.fixture(autouse=True)
def quiet_logging():
    debug.configure(level=DebugLevel.WARNING)
    yield


@pytest.fixture
def board() -> Board:
    return Board(GameConfig())


@pytest.fixture
def engine(board) -> GameEngine:
    return GameEngine(board, rng=np.random.default_rng(1234))


def draw_pattern(rows: int, cols: int):
    """Full board without any run of four: pairs of columns alternating per row."""
    return [Player.ONE.value if ((col // 2) + row) % 2 == 0 else Player.TWO.value
            for row in range(rows) for col in range(cols)]
