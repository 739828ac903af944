"""Unit tests for src/tictactoe/position.py"""

import pytest

from src.core.exceptions import MalformedContentError
from src.tictactoe.position import WINNING_COMBINATIONS, Position


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, Position.TOP_LEFT),
        (4, Position.CENTER),
        (8, Position.BOTTOM_RIGHT),
        ("7", Position.BOTTOM_CENTER),
        (" 2 ", Position.TOP_RIGHT),
        ("center", Position.CENTER),
        ("BOTTOM_LEFT", Position.BOTTOM_LEFT),
        ("top center", Position.TOP_CENTER),
    ],
)
def test_parse_position(value: object, expected: Position) -> None:
    """Index, numeric string or name all map onto the same squares."""
    assert Position.parse(value) == expected


@pytest.mark.parametrize(
    "value",
    [
        -1,  # below the board
        9,  # beyond the board
        "12",
        "middle",  # not a member name
        None,
        True,  # bool is an int, but not a position
        4.0,
        [4],
    ],
)
def test_parse_invalid_position(value: object) -> None:
    """Anything off the board, or not a position at all, is malformed content."""
    with pytest.raises(MalformedContentError):
        _ = Position.parse(value)


def test_rows_and_columns() -> None:
    """Squares are numbered row by row from the top left."""
    assert (Position.TOP_LEFT.row, Position.TOP_LEFT.column) == (0, 0)
    assert (Position.CENTER_RIGHT.row, Position.CENTER_RIGHT.column) == (1, 2)
    assert (Position.BOTTOM_CENTER.row, Position.BOTTOM_CENTER.column) == (2, 1)


def test_winning_combinations() -> None:
    """3 rows, 3 columns and 2 diagonals. Every line has 3 distinct squares."""
    assert len(WINNING_COMBINATIONS) == 8
    assert len(set(WINNING_COMBINATIONS)) == 8
    for line in WINNING_COMBINATIONS:
        assert len(set(line)) == 3
