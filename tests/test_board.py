import numpy as np
import pytest

from connectfour.game.board import Board, ColumnFullError, InvalidColumnError
from connectfour.utils import COLS, ROWS, Player


def test_new_board_is_empty() -> None:
    board = Board()
    assert board.grid.shape == (ROWS, COLS)
    assert not board.grid.any()
    assert board.valid_columns() == list(range(COLS))
    assert not board.is_full()


def test_pieces_stack_from_the_bottom() -> None:
    board = Board()
    assert board.drop(3, Player.RED) == 0
    assert board.drop(3, Player.YELLOW) == 1
    assert board.cell(3, 0) == Player.RED
    assert board.cell(3, 1) == Player.YELLOW
    assert board.cell(3, 2) is None
    assert board.column_height(3) == 2


@pytest.mark.parametrize("column", [-1, 7, 100, 2.0, "3", None, True])
def test_drop_rejects_invalid_columns(column) -> None:
    board = Board()
    with pytest.raises(InvalidColumnError) as excinfo:
        board.drop(column, Player.RED)
    assert str(excinfo.value) == "Invalid column"
    assert not board.grid.any()


def test_drop_accepts_numpy_integers() -> None:
    board = Board()
    assert board.drop(np.int64(6), Player.RED) == 0
    assert board.cell(6, 0) == Player.RED


def test_drop_into_full_column_raises_and_leaves_grid() -> None:
    board = Board()
    for i in range(ROWS):
        board.drop(0, Player.RED if i % 2 == 0 else Player.YELLOW)
    before = board.get_state()

    with pytest.raises(ColumnFullError) as excinfo:
        board.drop(0, Player.RED)

    assert str(excinfo.value) == "Column is full"
    assert excinfo.value.column == 0
    assert board.is_column_full(0)
    assert 0 not in board.valid_columns()
    np.testing.assert_array_equal(board.grid, before)


def test_clear_only_removes_top_piece() -> None:
    board = Board()
    board.drop(2, Player.RED)
    board.drop(2, Player.YELLOW)

    with pytest.raises(ValueError):
        board.clear(2, 0)
    with pytest.raises(ValueError):
        board.clear(2, 2)

    assert board.clear(2, 1) == Player.YELLOW
    assert board.column_height(2) == 1


def test_copy_is_independent() -> None:
    board = Board()
    board.drop(1, Player.RED)
    clone = board.copy()
    clone.drop(1, Player.YELLOW)
    assert board.column_height(1) == 1
    assert clone.column_height(1) == 2


def test_to_columns_indexes_by_column_then_row() -> None:
    board = Board()
    board.drop(4, Player.YELLOW)
    columns = board.to_columns()
    assert len(columns) == COLS
    assert all(len(column) == ROWS for column in columns)
    assert columns[4][0] == Player.YELLOW
    assert columns[4][1] is None


def test_cell_off_board_raises() -> None:
    with pytest.raises(IndexError):
        Board().cell(7, 0)


def test_render_puts_bottom_row_last() -> None:
    board = Board()
    board.drop(0, Player.RED)
    lines = board.render().splitlines()
    assert lines[ROWS] == "|R . . . . . .|"
    assert lines[1] == "|. . . . . . .|"
    assert lines[-1].split() == [str(i) for i in range(1, COLS + 1)]
