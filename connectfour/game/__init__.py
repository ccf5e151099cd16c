"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board representation and the game engine that
owns turns, history and status.
"""

from connectfour.game.board import Board, Connect4Error, InvalidColumnError, ColumnFullError
from connectfour.game.engine import GameEngine, MoveRecord, Snapshot

__all__ = ['Board', 'Connect4Error', 'InvalidColumnError', 'ColumnFullError',
           'GameEngine', 'MoveRecord', 'Snapshot']
