"""
cli.py - Command-line interface for the Connect-N engine

This module provides a CLI for playing against the computer, analyzing board
positions and benchmarking the engine.
"""

import argparse
import sys
import time
from typing import List, Optional, Sequence

import numpy as np

from connectn.config import GameConfig
from connectn.debug import debug, DebugLevel
from connectn.game.board import Board
from connectn.game.engine import GameEngine
from connectn.game.rules import ConnectNGame
from connectn.utils import (DEFAULT_COLS, DEFAULT_CONNECT_N, DEFAULT_ROWS, Coordinate,
                            Player, parse_position)

# Special codes returned by parse_move
QUIT = -1
RESTART = -2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='connectn', description='Connect-N CLI')

    board_args = argparse.ArgumentParser(add_help=False)
    board_args.add_argument('--rows', type=int, default=DEFAULT_ROWS, help='Number of rows')
    board_args.add_argument('--cols', type=int, default=DEFAULT_COLS, help='Number of columns')
    board_args.add_argument('--connect', type=int, default=DEFAULT_CONNECT_N,
                            help='Length of a winning run')
    board_args.add_argument('--debug', action='store_true', help='Enable debug logging')
    board_args.add_argument('--debug-level', type=str, default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level when --debug is not given')
    board_args.add_argument('--seed', type=int, default=None, help='Seed for the computer player')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', parents=[board_args],
                                        help='Play a game against the computer')
    play_parser.add_argument('--computer-first', action='store_true',
                             help='Let the computer make the first move')

    test_parser = subparsers.add_parser('test', parents=[board_args],
                                        help='Analyze a board position')
    test_parser.add_argument('--position', type=str, required=True,
                             help='Comma separated cell values (0 empty, 1 X, 2 O), row by row')

    benchmark_parser = subparsers.add_parser('benchmark', parents=[board_args],
                                             help='Benchmark performance')
    benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                  help='Number of iterations for benchmarking')

    return parser


def parse_move(text: str, board: Board) -> Optional[int]:
    """
    Parse a move typed by the user.

    Accepts a linear index ("14") or a column,row pair ("2,3"), plus 'q' to
    quit and 'r' to restart.

    Returns:
        The linear index, QUIT, RESTART, or None if the input is not a
        location on the board
    """
    text = text.strip().lower()
    if text == 'q':
        return QUIT
    if text == 'r':
        return RESTART

    try:
        if ',' in text:
            x, y = (int(part) for part in text.split(','))
            location = board.coordinate_to_index(Coordinate(x, y))
        else:
            location = int(text)
    except ValueError:
        return None

    return location if board.is_in_range(location) else None


class SimpleCLI:
    """Simple command-line interface for Connect-N."""

    def __init__(self, argv: Optional[Sequence[str]] = None):
        self.argv = argv
        self.args = None
        self.config: Optional[GameConfig] = None

    def parse_args(self) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = build_parser().parse_args(self.argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(getattr(self.args, 'debug_level', 'warning'))

        if self.args.command:
            self.config = GameConfig(rows=self.args.rows, cols=self.args.cols,
                                     connect_n=self.args.connect)

    def _rng(self) -> np.random.Generator:
        return np.random.default_rng(self.args.seed)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            try:
                self.parse_args()
            except ValueError as e:
                print(f"Invalid board configuration: {e}")
                return 2

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'test':
            return self.test_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play a game against the computer."""
        game = ConnectNGame(self.config, rng=self._rng(),
                            computer=Player.ONE if self.args.computer_first else Player.TWO)
        human = game.engine.opponent

        print(f"Starting a new game: connect {self.config.connect_n} on a "
              f"{self.config.rows}x{self.config.cols} board. You play {human}.")
        print(f"Enter a cell index (0-{self.config.size - 1}) or 'column,row'. "
              "Other commands: 'q' to quit, 'r' to restart.")
        print(game.render())

        while not game.is_game_over():
            if game.is_computer_turn():
                print("Computer is thinking...")
                time.sleep(0.3)
                location = game.computer_move()
                print(f"Computer plays {location} {game.board.index_to_coordinate(location)}")
                print(game.render())
                continue

            move = parse_move(input(f"Your move ({human}): "), game.board)
            if move is None:
                print("Invalid input. Enter a cell on the board or a command.")
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            if move == RESTART:
                game.reset()
                print("Game restarted.")
                print(game.render())
                continue

            if game.make_move(move):
                print(game.render())
            else:
                print(f"Cell {move} is already taken.")

        print("Game over!")
        winner = game.get_winner()
        if winner == human:
            print("You win! Congratulations!")
        elif winner is not None:
            print("The computer wins! Better luck next time.")
        else:
            print("It's a draw!")

    def test_position(self) -> int:
        """Analyze a position: result, winning run, evaluations and suggested move."""
        try:
            board = Board(self.config)
            board.load(parse_position(self.args.position, self.config.size))
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        engine = GameEngine(board, rng=self._rng())
        print("Loaded position:")
        print(board.render())

        result = engine.check_for_winner()
        print(f"\nResult: {result.name}")
        line = engine.winning_line()
        if line:
            print(f"Winning run: {line}")

        if not result.is_game_over():
            for player in (Player.ONE, Player.TWO):
                scores = np.array(engine.evaluate_board(player)).reshape(board.rows, board.cols)
                print(f"\nEvaluations for {player} ({player.name}):")
                print(scores)
            print(f"\nBest locations for {engine.computer}: {engine.best_locations()}")
            print(f"Suggested move: {engine.get_computer_move()}")
        return 0

    def benchmark(self) -> None:
        """Benchmark the hot operations of the engine."""
        iterations = self.args.iterations
        rng = self._rng()
        print(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("win_check")
        engine = GameEngine(Board(self.config), rng=rng)
        for _ in range(iterations):
            engine.clear_board()
            for location in rng.choice(self.config.size, size=self.config.size // 2, replace=False):
                engine.apply_move(Player(int(rng.integers(1, 3))), int(location))
            engine.check_for_winner()
        elapsed = self._stop("win_check")
        print(f"Win checks: {elapsed:.6f} seconds total, "
              f"{elapsed / iterations * 1000:.6f} ms per check")

        debug.start_timer("computer_move")
        engine.clear_board()
        for _ in range(iterations):
            engine.get_computer_move()
        elapsed = self._stop("computer_move")
        print(f"Computer moves on an empty board: {elapsed:.6f} seconds total, "
              f"{elapsed / iterations * 1000:.6f} ms per move")

        games = max(1, iterations // 10)
        total_moves = 0
        debug.start_timer("self_play")
        for _ in range(games):
            game = ConnectNGame(self.config, rng=rng)
            # Player.ONE gets its own engine on the same board
            first = GameEngine(game.board, rng=rng, computer=Player.ONE)
            while not game.is_game_over():
                if game.is_computer_turn():
                    location = game.computer_move()
                else:
                    location = first.get_computer_move()
                    if location < 0 or not game.make_move(location):
                        location = -1
                if location < 0:
                    break
                total_moves += 1
        elapsed = self._stop("self_play")
        print(f"Played {games} self-play games with {total_moves} moves: "
              f"{elapsed / games * 1000:.6f} ms per game")

    @staticmethod
    def _stop(marker: str) -> float:
        elapsed = debug.end_timer(marker, "cli")
        return elapsed if elapsed is not None else 0.0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
