"""
utils.py - Shared constants, enumerations and helpers for the Connect-N engine

This module provides the cell/player values, game results, direction vectors
and the text rendering used by the board, the engine and the interfaces.
"""

from enum import Enum, auto
from typing import NamedTuple, Tuple

import numpy as np

# Defaults for a game session, see connectn.config.GameConfig
DEFAULT_ROWS = 6
DEFAULT_COLS = 6
DEFAULT_CONNECT_N = 4


class Player(Enum):
    """Enumeration representing players and cell states."""
    OUT_OF_RANGE = -1  # returned by Board.get for locations off the grid
    EMPTY = 0
    ONE = 1    # First player (human by default)
    TWO = 2    # Second player (computer by default)

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return self

    def is_piece(self) -> bool:
        return self in (Player.ONE, Player.TWO)

    def __str__(self):
        if self == Player.ONE:
            return "X"
        elif self == Player.TWO:
            return "O"
        elif self == Player.EMPTY:
            return " "
        return "?"


# Values a board cell may hold
CELL_VALUES = (Player.EMPTY.value, Player.ONE.value, Player.TWO.value)


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @staticmethod
    def win_for(player: Player) -> 'GameResult':
        if player == Player.ONE:
            return GameResult.PLAYER_ONE_WIN
        if player == Player.TWO:
            return GameResult.PLAYER_TWO_WIN
        raise ValueError(f"{player!r} cannot win a game")


class Coordinate(NamedTuple):
    """Board coordinate: x is the column, y is the row."""
    x: int
    y: int

    def offset(self, dx: int, dy: int, steps: int = 1) -> 'Coordinate':
        return Coordinate(self.x + dx * steps, self.y + dy * steps)


class Direction(Enum):
    """Enumeration representing directions for line checking."""
    HORIZONTAL = auto()
    DIAGONAL_UP = auto()    # towards lower column, higher row
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # towards higher column, higher row


# Direction vectors (dx, dy). Iteration order is significant: win detection
# reports the first run found in this order.
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.VERTICAL: (0, 1),
    Direction.DIAGONAL_DOWN: (1, 1),
}


def cell_glyph(value: int) -> str:
    """Three-character rendering of a cell value."""
    return f" {Player(int(value))} "


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art.

    Cells are three characters wide and separated by '|'; rows are separated
    by a dashed divider.

    Args:
        grid: 2-D array of cell values

    Returns:
        ASCII representation of the board
    """
    rows, cols = grid.shape
    divider = "-" * (cols * 4 - 1)

    lines = []
    for row in range(rows):
        lines.append("|".join(cell_glyph(grid[row, col]) for col in range(cols)))
        if row != rows - 1:
            lines.append(divider)

    return "\n".join(lines)


def parse_position(text: str, size: int) -> Tuple[int, ...]:
    """
    Parse a comma separated position string such as "0,1,2,0,...".

    Raises:
        ValueError: if the string does not hold exactly ``size`` cell values
    """
    values = tuple(int(part) for part in text.replace(" ", "").split(",") if part)
    if len(values) != size:
        raise ValueError(f"Position string must have {size} values, got {len(values)}")
    invalid = [v for v in values if v not in CELL_VALUES]
    if invalid:
        raise ValueError(f"Invalid cell values in position: {sorted(set(invalid))}")
    return values
