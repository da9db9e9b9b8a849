"""
board.py - Board representation for the Connect-N engine

This module implements the Board class, the single source of truth for cell
occupancy. All coordinate arithmetic and bounds checking live here: cells can be
addressed by a row-major linear index or by a (x=column, y=row) Coordinate.
Out-of-range reads return Player.OUT_OF_RANGE and out-of-range writes are ignored,
so callers can probe neighbouring cells near the edges without checking bounds.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np

from connectn.config import GameConfig, KEY_GAME_BOARD
from connectn.debug import debug
from connectn.utils import CELL_VALUES, Coordinate, Player, render_board_ascii

Location = Union[int, Coordinate, Tuple[int, int]]


class Board:
    """
    A rows x cols grid of cells holding EMPTY, ONE or TWO.

    The grid is stored as a 2-D numpy array indexed [row, col]; linear indices
    are derived with index = row * cols + col.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.rows = self.config.rows
        self.cols = self.config.cols
        self.size = self.rows * self.cols
        debug.debug(f"Initializing new {self.rows}x{self.cols} Board", "board")
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)

    def clear(self) -> None:
        """Set every cell to EMPTY."""
        debug.debug("Clearing board", "board")
        self.grid.fill(Player.EMPTY.value)

    def copy(self) -> 'Board':
        """Create an independent copy of the board."""
        new_board = Board(self.config)
        new_board.grid = self.grid.copy()
        return new_board

    # --- range checks and conversions ---

    def is_in_range(self, location: Location) -> bool:
        """
        Check whether a location lies on the board.

        An index is valid if 0 <= index < rows * cols; a coordinate is valid if
        0 <= x < cols and 0 <= y < rows.
        """
        if isinstance(location, tuple):
            x, y = location
            return 0 <= x < self.cols and 0 <= y < self.rows
        return 0 <= location < self.size

    def index_to_coordinate(self, index: int) -> Optional[Coordinate]:
        """
        Convert a linear index to a coordinate.

        Returns:
            Coordinate(index % cols, index // cols), or None if out of range
        """
        if not self.is_in_range(index):
            return None
        return Coordinate(int(index) % self.cols, int(index) // self.cols)

    def coordinate_to_index(self, coordinate: Tuple[int, int]) -> int:
        """
        Convert a coordinate to a linear index.

        Returns:
            y * cols + x, or -1 if the coordinate is out of range
        """
        if not self.is_in_range(coordinate):
            return -1
        x, y = coordinate
        return y * self.cols + x

    def _cell(self, location: Location) -> Optional[Tuple[int, int]]:
        """(row, col) of a location, or None when it is off the board."""
        if not self.is_in_range(location):
            return None
        if isinstance(location, tuple):
            x, y = location
            return y, x
        return int(location) // self.cols, int(location) % self.cols

    # --- cell access ---

    def get(self, location: Location) -> Player:
        """
        Get the value of a cell.

        Returns:
            The cell value, or Player.OUT_OF_RANGE if the location is off the board
        """
        cell = self._cell(location)
        if cell is None:
            return Player.OUT_OF_RANGE
        return Player(int(self.grid[cell]))

    def set(self, location: Location, value: Player) -> None:
        """
        Set the value of a cell. Locations off the board are ignored.

        Raises:
            ValueError: if value is not EMPTY, ONE or TWO
        """
        if value.value not in CELL_VALUES:
            raise ValueError(f"{value!r} is not a cell value")
        cell = self._cell(location)
        if cell is None:
            debug.trace(f"Ignoring write of {value.name} to out-of-range location {location}", "board")
            return
        self.grid[cell] = value.value

    # --- whole-board queries ---

    def empty_locations(self) -> List[int]:
        """Linear indices of all EMPTY cells in row-major order."""
        return [int(i) for i in np.flatnonzero(self.grid == Player.EMPTY.value)]

    def is_full(self) -> bool:
        return not np.any(self.grid == Player.EMPTY.value)

    def get_state(self) -> np.ndarray:
        """Get a copy of the grid as a numpy array."""
        return self.grid.copy()

    def load(self, values: Iterable[int]) -> None:
        """
        Fill the board from a flat, row-major sequence of cell values.

        Raises:
            ValueError: on a wrong number of values or a value that is not a cell value
        """
        flat = [int(v) for v in values]
        if len(flat) != self.size:
            raise ValueError(f"Expected {self.size} cell values, got {len(flat)}")
        invalid = sorted({v for v in flat if v not in CELL_VALUES})
        if invalid:
            raise ValueError(f"Invalid cell values: {invalid}")
        self.grid = np.array(flat, dtype=np.int8).reshape(self.rows, self.cols)

    def to_dict(self) -> dict:
        """Configuration dictionary including the cells of this board."""
        return self.config.to_dict(board=self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Board':
        """
        Restore a board from its configuration dictionary.

        A missing "board" entry gives an empty board.

        Raises:
            ValueError: if the configuration or the cell grid is malformed
        """
        board = cls(GameConfig.from_dict(data))
        cells = data.get(KEY_GAME_BOARD)
        if cells is not None:
            if not isinstance(cells, (list, tuple)) or not all(isinstance(row, (list, tuple)) for row in cells):
                raise ValueError("Board grid must be a list of rows")
            if len(cells) != board.rows or any(len(row) != board.cols for row in cells):
                raise ValueError(f"Board grid must be {board.rows}x{board.cols}")
            values = [value for row in cells for value in row]
            if any(isinstance(v, bool) or not isinstance(v, int) for v in values):
                raise ValueError("Board cells must be integers")
            board.load(values)
        return board

    def render(self) -> str:
        """Render the board as a string."""
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols}, connect_n={self.config.connect_n})"
