"""
board.py - Board representation for Connect Four

This module implements the Board class, a 7x6 grid where pieces fall to the
lowest free row of a column. The board knows nothing about turns, history or
game status; those belong to the GameEngine.
"""

import numpy as np
from typing import List, Optional, Tuple

from connectfour.debug import debug
from connectfour.utils import (ROWS, COLS, EMPTY, Player,
                               is_valid_position, render_board_ascii)


class Connect4Error(Exception):
    """Base class for rejected board operations."""
    message = "Invalid move"

    def __init__(self, column: int, message: Optional[str] = None):
        self.column = column
        super().__init__(message or self.message)


class InvalidColumnError(Connect4Error):
    """The column index is outside 0-6."""
    message = "Invalid column"


class ColumnFullError(Connect4Error):
    """The column has no free cell left."""
    message = "Column is full"


def validate_column(column) -> None:
    """Raise InvalidColumnError unless column is an integer in 0-6."""
    if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
        raise InvalidColumnError(column)
    if not 0 <= column < COLS:
        raise InvalidColumnError(column)


class Board:
    """
    A Connect Four grid.

    The grid is a numpy array indexed as grid[row, column] with row 0 at the
    bottom. Within every column the occupied cells form one contiguous stack
    starting at row 0.
    """

    def __init__(self):
        """Initialize an empty board."""
        self.reset()

    def reset(self):
        """Empty every cell."""
        self.grid = np.full((ROWS, COLS), EMPTY, dtype=np.int8)

    def copy(self) -> 'Board':
        new_board = Board()
        new_board.grid = self.grid.copy()
        return new_board

    def cell(self, column: int, row: int) -> Optional[Player]:
        """
        Get the owner of a cell.

        Returns:
            The Player occupying (column, row), or None if it is empty
        """
        if not is_valid_position(column, row):
            raise IndexError(f"Position ({column}, {row}) is off the board")
        value = self.grid[row, column]
        return None if value == EMPTY else Player(int(value))

    def column_height(self, column: int) -> int:
        """Number of pieces stacked in a column."""
        for row in range(ROWS):
            if self.grid[row, column] == EMPTY:
                return row
        return ROWS

    def is_column_full(self, column: int) -> bool:
        return self.grid[ROWS - 1, column] != EMPTY

    def is_full(self) -> bool:
        """True when the top row of every column is occupied."""
        return bool(np.all(self.grid[ROWS - 1] != EMPTY))

    def valid_columns(self) -> List[int]:
        return [col for col in range(COLS) if not self.is_column_full(col)]

    def drop(self, column: int, player: Player) -> int:
        """
        Drop a piece into a column.

        Args:
            column: Column index (0-6)
            player: Owner of the new piece

        Returns:
            The row the piece landed in

        Raises:
            InvalidColumnError: column is out of range
            ColumnFullError: column has no free cell
        """
        validate_column(column)

        row = self.column_height(column)
        if row >= ROWS:
            raise ColumnFullError(column)

        self.grid[row, column] = player.value
        debug.trace(f"{player.label} piece placed at ({column}, {row})", "board")
        return row

    def clear(self, column: int, row: int) -> Player:
        """
        Remove the piece at (column, row).

        Only the top piece of a stack may be removed, which keeps columns
        contiguous.

        Returns:
            The player whose piece was removed
        """
        owner = self.cell(column, row)
        if owner is None:
            raise ValueError(f"Cannot clear ({column}, {row}): cell is empty")
        if row + 1 < ROWS and self.grid[row + 1, column] != EMPTY:
            raise ValueError(f"Cannot clear ({column}, {row}): it is not the top of its column")

        self.grid[row, column] = EMPTY
        debug.trace(f"Cleared ({column}, {row})", "board")
        return owner

    def to_columns(self) -> Tuple[Tuple[Optional[Player], ...], ...]:
        """Immutable copy of the board as board[column][row]."""
        return tuple(
            tuple(self.cell(col, row) for row in range(ROWS))
            for col in range(COLS)
        )

    def get_state(self) -> np.ndarray:
        """Copy of the raw grid (row 0 at the bottom)."""
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
