"""
config.py - Per-session configuration for the Connect-N engine

GameConfig holds the board dimensions and the connect length; EvalWeights holds
the coefficients used by the computer player's positional evaluation. Both are
plain values passed to Board/GameEngine constructors so that sessions with
different sizes can coexist.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping

from connectn.utils import DEFAULT_ROWS, DEFAULT_COLS, DEFAULT_CONNECT_N

# Keys of the dictionary form of a game configuration
KEY_COLUMN_COUNT = "column_count"
KEY_ROW_COUNT = "row_count"
KEY_CONNECT_LENGTH = "connect_length"
KEY_GAME_BOARD = "board"


def _require_int(data: Mapping[str, Any], key: str) -> int:
    if key not in data:
        raise ValueError(f"Missing configuration key '{key}'")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Configuration key '{key}' must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions and the length of a winning run."""
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    connect_n: int = DEFAULT_CONNECT_N

    def __post_init__(self):
        for name in ("rows", "cols", "connect_n"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.connect_n > max(self.rows, self.cols):
            raise ValueError(
                f"connect_n={self.connect_n} does not fit on a {self.rows}x{self.cols} board")

    @property
    def size(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.cols

    def to_dict(self, board=None) -> Dict[str, Any]:
        """
        Dictionary form of the configuration.

        Args:
            board: Optional Board whose cells are included under "board"

        Returns:
            {"column_count", "row_count", "connect_length"[, "board"]}
        """
        data: Dict[str, Any] = {
            KEY_COLUMN_COUNT: self.cols,
            KEY_ROW_COUNT: self.rows,
            KEY_CONNECT_LENGTH: self.connect_n,
        }
        if board is not None:
            data[KEY_GAME_BOARD] = board.get_state().tolist()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'GameConfig':
        """
        Restore a configuration from its dictionary form.

        Raises:
            ValueError: if a key is missing or holds a non-integer
        """
        return cls(rows=_require_int(data, KEY_ROW_COUNT),
                   cols=_require_int(data, KEY_COLUMN_COUNT),
                   connect_n=_require_int(data, KEY_CONNECT_LENGTH))


@dataclass(frozen=True)
class EvalWeights:
    """
    Coefficients of the computer player's evaluation.

    Raising ``player`` relative to ``computer`` makes the computer focus on
    blocking the opponent; raising ``computer`` makes it play for its own lines.
    ``populated`` and ``empty`` weigh own pieces and free cells along a line.
    """
    computer: int = 1
    player: int = 1
    populated: int = 3
    empty: int = 1

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)
