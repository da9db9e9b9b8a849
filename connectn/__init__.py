"""
connectn - Connect-N game engine with a heuristic computer player

This package provides the board representation, the rules (win and draw
detection), a one-ply positional computer player, a game session manager,
a Gymnasium environment and a command-line interface.
"""

__version__ = '0.1.0'
