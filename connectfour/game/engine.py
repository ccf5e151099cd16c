"""
engine.py - Game state engine for Connect Four

The GameEngine owns the board, whose turn it is, the undo history, the game
status and the current error message. Interfaces read it through snapshot()
and drive it with drop(), undo() and restart(). Commands never raise: a
rejected command is reported through the error message of the next snapshot.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Tuple

from connectfour.debug import debug
from connectfour.game.board import Board, Connect4Error, validate_column
from connectfour.utils import (ROWS, COLS, EMPTY, Coord, Player, GameStatus,
                               check_win_at_position, render_board_ascii,
                               status_message)


@dataclass(frozen=True)
class MoveRecord:
    """A placed piece: where it landed and who placed it."""
    column: int
    row: int
    player: Player


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only view of the engine state.

    board is indexed as board[column][row] with row 0 at the bottom; each cell
    is None or the Player occupying it. winning_line holds the (column, row)
    cells of the line that ended the game, empty unless someone has won.
    """
    board: Tuple[Tuple[Optional[Player], ...], ...]
    status: GameStatus
    turn: Player
    error: Optional[str] = None
    winning_line: Tuple[Coord, ...] = ()

    def cell(self, column: int, row: int) -> Optional[Player]:
        return self.board[column][row]

    @property
    def is_game_over(self) -> bool:
        return self.status.is_game_over()

    @property
    def message(self) -> str:
        """Status banner for display."""
        return status_message(self.status, self.turn)

    @property
    def move_count(self) -> int:
        return sum(cell is not None for column in self.board for cell in column)

    def valid_moves(self) -> List[int]:
        """Columns that would accept a drop in this state."""
        if self.is_game_over:
            return []
        return [col for col in range(COLS) if self.board[col][ROWS - 1] is None]

    def to_grid(self) -> np.ndarray:
        """The board as a grid[row, column] array (0 empty, 1 red, 2 yellow)."""
        grid = np.full((ROWS, COLS), EMPTY, dtype=np.int8)
        for col in range(COLS):
            for row in range(ROWS):
                owner = self.board[col][row]
                if owner is not None:
                    grid[row, col] = owner.value
        return grid

    def render(self) -> str:
        """Draw a full frame: board, status banner and error banner."""
        lines = [render_board_ascii(self.to_grid()), self.message]
        if self.error:
            lines.append(f"Oops! {self.error}")
        return "\n".join(lines)


class GameEngine:
    """
    Connect Four rules and turn bookkeeping.

    Red always moves first. A win is detected only along lines through the
    piece just dropped, which is enough because a new line of four must
    include the newest piece.
    """

    def __init__(self):
        debug.debug("Initializing GameEngine", "engine")
        self.restart()

    def restart(self) -> None:
        """Reset to an empty board with Red to move."""
        self._board = Board()
        self._history: List[MoveRecord] = []
        self._status = GameStatus.IN_PROGRESS
        self._turn = Player.RED
        self._error: Optional[str] = None
        self._winning_line: List[Coord] = []
        debug.debug("Game restarted", "engine")

    # Queries

    def snapshot(self) -> Snapshot:
        return Snapshot(
            board=self._board.to_columns(),
            status=self._status,
            turn=self._turn,
            error=self._error,
            winning_line=tuple(self._winning_line),
        )

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def turn(self) -> Player:
        return self._turn

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def history(self) -> Tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def board(self) -> Board:
        """A copy of the board; mutating it does not affect the game."""
        return self._board.copy()

    def valid_moves(self) -> List[int]:
        """Columns that would accept a drop right now."""
        if self._status.is_game_over():
            return []
        return self._board.valid_columns()

    def winning_line(self) -> List[Coord]:
        """Cells of the line that ended the game, or [] if nobody has won."""
        return list(self._winning_line)

    # Commands

    def drop(self, column: int) -> bool:
        """
        Drop a piece for the current player.

        Checks run in order: column range, then game over, then column space.
        An out-of-range column or a full column sets the error message and
        leaves the board untouched. Dropping after the game has ended does
        nothing at all.

        Returns:
            True if a piece was placed
        """
        debug.debug(f"{self._turn.label} drops in column {column}", "engine")

        try:
            validate_column(column)
            if self._status.is_game_over():
                debug.debug(f"Drop ignored, game is over ({self._status.name})", "engine")
                return False
            row = self._board.drop(column, self._turn)
        except Connect4Error as exc:
            self._error = str(exc)
            debug.debug(f"Drop rejected: {exc}", "engine")
            return False

        player = self._turn
        self._history.append(MoveRecord(int(column), row, player))
        self._error = None

        line = check_win_at_position(self._board.grid, int(column), row)
        if line:
            self._status = GameStatus.win_for(player)
            self._winning_line = line
            debug.info(f"{player.label} wins with {sorted(line)}", "engine")
        elif self._board.is_full():
            self._status = GameStatus.DRAW
            debug.info(f"Draw after {len(self._history)} moves", "engine")
        else:
            self._turn = player.other()

        return True

    def undo(self) -> bool:
        """
        Take back the most recent move.

        The mover gets the turn back and the game is always returned to
        IN_PROGRESS. Does nothing when there is no history.

        Returns:
            True if a move was undone
        """
        if not self._history:
            debug.debug("No moves to undo", "engine")
            return False

        record = self._history.pop()
        self._board.clear(record.column, record.row)
        self._turn = record.player
        self._status = GameStatus.IN_PROGRESS
        self._winning_line = []
        self._error = None
        debug.debug(f"Undid {record.player.label} at ({record.column}, {record.row})", "engine")
        return True

    def render(self) -> str:
        return self.snapshot().render()

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"GameEngine(status={self._status.name}, turn={self._turn.name}, "
                f"moves={len(self._history)}/{ROWS * COLS})")
