"""Shared move sequences and helpers for the test suite."""

# Columns for a 42-move game that fills the board without any line of four.
# Columns 0, 2 / 1, 3 / 5, 6 are filled in interleaved pairs, column 4 last.
DRAW_SEQUENCE = (
    [0, 2, 2, 0] * 3
    + [1, 3, 3, 1] * 3
    + [5, 6, 6, 5] * 3
    + [4] * 6
)

# A 42-move game whose last drop fills the board and also completes Yellow's
# vertical line in column 4 (rows 2-5). No earlier position holds a line.
FULL_BOARD_WIN_SEQUENCE = (
    [1, 3, 3, 1] * 3
    + [5, 6, 6, 5] * 3
    + [4, 2, 4, 4, 0, 0, 0, 0, 0, 4, 0, 4, 2, 2, 2, 2, 2, 4]
)


def play(engine, columns):
    """Drop into each column in turn, asserting every drop is accepted."""
    for column in columns:
        assert engine.drop(column), f"drop({column}) rejected: {engine.error}"
    return engine
