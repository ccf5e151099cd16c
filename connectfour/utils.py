"""
utils.py - Constants, enumerations and helpers shared by the Connect Four engine

Board coordinates are always given as (column, row). Row 0 is the bottom row,
so a piece dropped into an empty column lands at row 0.
"""

from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

from connectfour.debug import debug

# Board geometry
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a line needed to win

EMPTY = 0  # Grid value of an unoccupied cell

Coord = Tuple[int, int]  # (column, row)


class Player(Enum):
    """The two players. Grid cells store the enum value."""
    RED = 1     # Always moves first
    YELLOW = 2

    def other(self) -> 'Player':
        """Get the opposing player."""
        return Player.YELLOW if self == Player.RED else Player.RED

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def __str__(self):
        return "R" if self == Player.RED else "Y"


class GameStatus(Enum):
    """Overall state of a game. Every value except IN_PROGRESS is terminal."""
    IN_PROGRESS = auto()
    RED_WINS = auto()
    YELLOW_WINS = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameStatus.IN_PROGRESS

    def winner(self) -> Optional[Player]:
        """The winning player, or None for a draw or an unfinished game."""
        if self == GameStatus.RED_WINS:
            return Player.RED
        if self == GameStatus.YELLOW_WINS:
            return Player.YELLOW
        return None

    @staticmethod
    def win_for(player: Player) -> 'GameStatus':
        return GameStatus.RED_WINS if player == Player.RED else GameStatus.YELLOW_WINS


class Direction(Enum):
    """The four line axes checked for a win."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # Bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Top-left to bottom-right


# Step vectors (column, row) for each axis, in evaluation order
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (1, 0),
    Direction.VERTICAL: (0, 1),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (1, -1),
}


def is_valid_position(column: int, row: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        column: Column index
        row: Row index (0 is the bottom)

    Returns:
        True if position is on the board, False otherwise
    """
    return 0 <= column < COLS and 0 <= row < ROWS


def count_line(grid: np.ndarray, column: int, row: int, direction: Direction) -> List[Coord]:
    """
    Collect the run of same-owner cells through (column, row) along one axis.

    The anchor cell is always first in the result, followed by the cells found
    walking in the positive direction and then the negative direction.

    Args:
        grid: Board grid indexed as grid[row, column]
        column: Anchor column
        row: Anchor row
        direction: Axis to walk

    Returns:
        Positions of the run, empty if the anchor cell is empty
    """
    owner = grid[row, column]
    if owner == EMPTY:
        return []

    dc, dr = DIRECTION_VECTORS[direction]
    positions = [(column, row)]

    c, r = column + dc, row + dr
    while is_valid_position(c, r) and grid[r, c] == owner:
        positions.append((c, r))
        c += dc
        r += dr

    c, r = column - dc, row - dr
    while is_valid_position(c, r) and grid[r, c] == owner:
        positions.append((c, r))
        c -= dc
        r -= dr

    return positions


def check_win_at_position(grid: np.ndarray, column: int, row: int) -> List[Coord]:
    """
    Check whether the piece at (column, row) is part of a line of CONNECT_N.

    Only lines through the given cell are examined, so this is meant to be
    called with the cell that was just filled.

    Returns:
        The winning line (anchor first), or an empty list if there is none
    """
    for direction in DIRECTION_VECTORS:
        line = count_line(grid, column, row, direction)
        if len(line) >= CONNECT_N:
            debug.trace(f"{direction.name} line of {len(line)} through ({column}, {row})", "board")
            return line

    return []


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art, top row first.

    Columns are labelled 1-7, the numbering players type in the terminal.
    """
    border = "+" + "-" * (COLS * 2 - 1) + "+"
    result = [border]

    for row in range(ROWS - 1, -1, -1):
        cells = []
        for col in range(COLS):
            value = grid[row, col]
            cells.append("." if value == EMPTY else str(Player(value)))
        result.append("|" + " ".join(cells) + "|")

    result.append(border)
    result.append(" " + " ".join(str(i + 1) for i in range(COLS)) + " ")

    return "\n".join(result)


def status_message(status: GameStatus, turn: Player) -> str:
    """Banner text describing the game status."""
    if status == GameStatus.RED_WINS:
        return "RED WINS!"
    if status == GameStatus.YELLOW_WINS:
        return "YELLOW WINS!"
    if status == GameStatus.DRAW:
        return "IT'S A TIE!"
    return f"{turn.label}'s Turn"
