"""
engine.py - Rules and computer player for the Connect-N engine

GameEngine applies moves to a Board, detects wins and draws, and picks moves for
the computer player with a one-ply positional evaluation: every empty cell is
scored by how much it extends lines that could still become a run of connect_n,
once for the computer and once for its opponent, and the best-scoring cell is
played (ties broken at random).
"""

from typing import List, Optional

import numpy as np

from connectn.config import EvalWeights, GameConfig
from connectn.debug import debug
from connectn.game.board import Board, Location
from connectn.utils import DIRECTION_VECTORS, Coordinate, GameResult, Player


class GameEngine:
    """
    Game rules and move selection over a Board.

    The engine reads the board freely but only writes to it through
    apply_move and clear_board.
    """

    def __init__(self, board: Optional[Board] = None,
                 weights: Optional[EvalWeights] = None,
                 rng: Optional[np.random.Generator] = None,
                 computer: Player = Player.TWO):
        """
        Initialize the engine.

        Args:
            board: Board to play on (a default 6x6 board if omitted)
            weights: Evaluation coefficients
            rng: Random generator used to break ties between equally good moves
            computer: The player the engine chooses moves for
        """
        if not computer.is_piece():
            raise ValueError(f"Computer must be Player.ONE or Player.TWO, got {computer!r}")

        self.board = board if board is not None else Board()
        self.weights = weights or EvalWeights()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.computer = computer
        self.opponent = computer.other()
        debug.debug(f"Initializing GameEngine for {self.board!r}, computer={computer.name}", "engine")

    @classmethod
    def from_config(cls, config: GameConfig, **kwargs) -> 'GameEngine':
        """Create an engine on a fresh board of the given configuration."""
        return cls(Board(config), **kwargs)

    @property
    def connect_n(self) -> int:
        return self.board.config.connect_n

    def clear_board(self) -> None:
        self.board.clear()

    def apply_move(self, player: Player, location: Location) -> None:
        """
        Place a piece for player if the location is an EMPTY cell.

        Moves onto occupied or off-board cells are ignored; callers needing
        feedback should check board.get(location) first.

        Raises:
            ValueError: if player is not Player.ONE or Player.TWO
        """
        if not player.is_piece():
            raise ValueError(f"Only Player.ONE or Player.TWO can move, got {player!r}")
        if self.board.get(location) == Player.EMPTY:
            debug.debug(f"{player.name} plays {location}", "engine")
            self.board.set(location, player)
        else:
            debug.debug(f"Ignoring {player.name} move at {location}: not an empty cell", "engine")

    # --- terminal state ---

    def _run_from(self, origin: Coordinate, dx: int, dy: int) -> bool:
        """True if connect_n cells starting at origin along (dx, dy) hold the same value."""
        value = self.board.get(origin)
        return all(self.board.get(origin.offset(dx, dy, i)) == value
                   for i in range(1, self.connect_n))

    def winning_line(self) -> List[int]:
        """
        Linear indices of the first winning run, or an empty list.

        Locations are scanned in row-major order and directions in the order of
        DIRECTION_VECTORS; the first run found is reported.
        """
        for location in range(self.board.size):
            origin = self.board.index_to_coordinate(location)
            if not self.board.get(origin).is_piece():
                continue
            for dx, dy in DIRECTION_VECTORS.values():
                if self._run_from(origin, dx, dy):
                    return [self.board.coordinate_to_index(origin.offset(dx, dy, i))
                            for i in range(self.connect_n)]
        return []

    def check_for_winner(self) -> GameResult:
        """
        Determine the current result of the game.

        Returns:
            The win of the owner of the first run found, DRAW if the board is
            full, IN_PROGRESS otherwise
        """
        line = self.winning_line()
        if line:
            winner = self.board.get(line[0])
            debug.debug(f"{winner.name} has a run at {line}", "engine")
            return GameResult.win_for(winner)

        if self.board.is_full():
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    # --- computer player ---

    def evaluate_location(self, location: Location, player: Player) -> int:
        """
        Score a cell by its worth to player for building a run.

        For each direction the walk goes up to connect_n - 1 cells each way,
        stopping at an opponent piece or the board edge. Free cells add
        weights.empty and own pieces weights.populated. A direction that is
        nearly full of own pieces scores double, and a direction with fewer
        than connect_n - 1 reachable cells can never complete a run and
        scores nothing.

        Returns:
            The summed score, or -1 if the cell is not empty
        """
        if isinstance(location, tuple):
            origin = Coordinate(*location)
        else:
            origin = self.board.index_to_coordinate(location)

        if origin is None or self.board.get(origin) != Player.EMPTY:
            return -1

        reach = self.connect_n - 1
        weights = self.weights
        total = 0

        for dx, dy in DIRECTION_VECTORS.values():
            distance = 0
            score = 0
            for sign in (-1, 1):
                for step in range(1, reach + 1):
                    value = self.board.get(origin.offset(dx, dy, sign * step))
                    if value == Player.EMPTY:
                        score += weights.empty
                    elif value == player:
                        score += weights.populated
                    else:
                        break
                    distance += 1

            if score >= reach * weights.populated + (distance - reach) * weights.empty:
                score *= 2
            if distance >= reach:
                total += score

        return total

    def evaluate_board(self, player: Player) -> List[int]:
        """Evaluation of every location for player, in index order."""
        return [self.evaluate_location(location, player) for location in range(self.board.size)]

    def score_location(self, location: int) -> int:
        """Combined offensive and defensive score of a location."""
        return (self.evaluate_location(location, self.computer) * self.weights.computer
                + self.evaluate_location(location, self.opponent) * self.weights.player)

    def best_locations(self) -> List[int]:
        """
        All empty locations tied at the highest combined score.

        The running maximum starts at 0, so only locations scoring at least 0
        can be candidates.
        """
        best: List[int] = []
        best_score = 0
        for location in self.board.empty_locations():
            score = self.score_location(location)
            if score > best_score:
                best_score = score
                best = []
            if score == best_score:
                best.append(location)

        debug.trace(f"Best score {best_score} at {best}", "engine")
        return best

    def get_computer_move(self) -> int:
        """
        Choose the computer's next location.

        Returns:
            A location chosen uniformly at random among the best scoring ones,
            or -1 when the board has no empty cell
        """
        candidates = self.best_locations()
        if not candidates:
            # Only reachable with negative weights or on a full board
            candidates = self.board.empty_locations()
            if not candidates:
                debug.warning("No empty cell left for the computer", "engine")
                return -1

        move = int(self.rng.choice(candidates))
        debug.debug(f"Computer chooses {move} from {len(candidates)} candidate(s)", "engine")
        return move

    def render(self) -> str:
        return self.board.render()
