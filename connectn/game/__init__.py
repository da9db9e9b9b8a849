"""
connectn.game - Core game mechanics for Connect-N

This package contains the board representation, the rules engine with the
computer player, and game session management.
"""

from connectn.game.board import Board
from connectn.game.engine import GameEngine
from connectn.game.rules import ConnectNGame, ConnectNEnv

__all__ = ['Board', 'GameEngine', 'ConnectNGame', 'ConnectNEnv']
