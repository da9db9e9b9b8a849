"""
rules.py - Game session management and Gymnasium environment for Connect-N

This module provides:
1. ConnectNGame, a human-versus-computer session that alternates turns and
   stops accepting moves once the game is decided
2. ConnectNEnv, a gymnasium-compatible environment where an agent plays
   Player.ONE against the engine's computer player
"""

from typing import Any, Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connectn.config import EvalWeights, GameConfig
from connectn.debug import debug
from connectn.game.board import Board, Location
from connectn.game.engine import GameEngine
from connectn.utils import GameResult, Player


class ConnectNGame:
    """
    High-level Connect-N game manager.

    Player.ONE always moves first. The engine plays for ``computer``; the
    other player is expected to be a human (or any external caller).
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 weights: Optional[EvalWeights] = None,
                 rng: Optional[np.random.Generator] = None,
                 computer: Player = Player.TWO):
        debug.debug("Initializing ConnectNGame", "game")
        self.config = config or GameConfig()
        self.engine = GameEngine(Board(self.config), weights=weights, rng=rng, computer=computer)
        self.current_player = Player.ONE
        self.game_result = GameResult.IN_PROGRESS
        self.moves_made: List[int] = []

    @property
    def board(self) -> Board:
        return self.engine.board

    def reset(self) -> None:
        """Reset the game to its initial state."""
        debug.debug("Resetting game", "game")
        self.engine.clear_board()
        self.current_player = Player.ONE
        self.game_result = GameResult.IN_PROGRESS
        self.moves_made = []

    def is_valid_move(self, location: Location) -> bool:
        if self.game_result.is_game_over():
            debug.debug(f"Invalid move: game is over (result: {self.game_result.name})", "game")
            return False
        if self.board.get(location) != Player.EMPTY:
            debug.debug(f"Invalid move: {location} is not an empty cell", "game")
            return False
        return True

    def get_valid_moves(self) -> List[int]:
        """Linear indices the current player may play."""
        if self.game_result.is_game_over():
            return []
        return self.board.empty_locations()

    def make_move(self, location: Location) -> bool:
        """
        Play a move for the current player.

        Returns:
            True if the move was accepted, False otherwise
        """
        if not self.is_valid_move(location):
            return False

        self.engine.apply_move(self.current_player, location)
        if isinstance(location, tuple):
            location = self.board.coordinate_to_index(location)
        self.moves_made.append(int(location))

        self.game_result = self.engine.check_for_winner()
        if self.game_result.is_game_over():
            debug.info(f"Game over after {len(self.moves_made)} moves: {self.game_result.name}", "game")
        else:
            self.current_player = self.current_player.other()

        return True

    def computer_move(self) -> int:
        """
        Let the engine choose and play a move for the current player.

        Returns:
            The location played, or -1 if no move was possible
        """
        if self.game_result.is_game_over() or self.current_player != self.engine.computer:
            return -1

        location = self.engine.get_computer_move()
        if location < 0 or not self.make_move(location):
            return -1
        return location

    def is_computer_turn(self) -> bool:
        return not self.game_result.is_game_over() and self.current_player == self.engine.computer

    def is_game_over(self) -> bool:
        return self.game_result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """The winning player, or None if the game is undecided or drawn."""
        if self.game_result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self.game_result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    def get_current_player(self) -> Player:
        return self.current_player

    def render(self) -> str:
        return self.board.render()


class ConnectNEnv(gym.Env):
    """
    Connect-N environment following the Gymnasium interface.

    The agent plays Player.ONE by choosing a linear cell index; the engine
    replies as Player.TWO within the same step.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, config: Optional[GameConfig] = None,
                 weights: Optional[EvalWeights] = None,
                 render_mode: Optional[str] = None):
        debug.debug("Initializing ConnectNEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.config = config or GameConfig()
        self.game = ConnectNGame(self.config, weights=weights)
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(self.config.size)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(self.config.rows, self.config.cols), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        debug.debug("Resetting environment", "env")

        self.game.reset()
        # Tie-breaking follows the environment's seeded generator
        self.game.engine.rng = self.np_random

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Play the agent's move, then the engine's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        if not self.game.make_move(int(action)):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        if not self.game.is_game_over():
            reply = self.game.computer_move()
            debug.debug(f"Engine replies with {reply}", "env")

        result = self.game.game_result
        reward = self.reward_step
        terminated = result.is_game_over()
        if result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif result == GameResult.DRAW:
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = self.game.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.game.current_player.value,
            'game_result': self.game.game_result.name,
            'moves_made': len(self.game.moves_made),
            'winning_line': self.game.engine.winning_line(),
        }
