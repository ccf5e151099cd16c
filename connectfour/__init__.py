"""
connectfour - Connect Four game-state engine

This package provides the board model, move legality, win/draw detection,
turn management and undo history for a two-player Connect Four game, plus a
terminal interface and a Gymnasium adapter that drive the engine.
"""

# Version number
__version__ = '0.2.0'
