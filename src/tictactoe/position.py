"""
A square on the 3x3 grid

(placed in its own module as the board, the game and the session all need to import it)
"""

from enum import IntEnum
from typing import Any, Self

from src.core.exceptions import MalformedContentError

# The grid is always 3x3. Squares are numbered row by row, starting top left.
BOARD_DIMENSIONS = (3, 3)


class Position(IntEnum):
    TOP_LEFT = 0
    TOP_CENTER = 1
    TOP_RIGHT = 2
    CENTER_LEFT = 3
    CENTER = 4
    CENTER_RIGHT = 5
    BOTTOM_LEFT = 6
    BOTTOM_CENTER = 7
    BOTTOM_RIGHT = 8

    @classmethod
    def parse(cls, value: Any) -> Self:
        """Accepts the square index (int or numeric string) or the member name, e.g. 4, "4" or "center"."""
        if isinstance(value, bool):
            # bool is an int subclass, but `True` is not a square
            raise MalformedContentError(f"Cannot interpret {value!r} as a position.")

        if isinstance(value, int):
            index = value
        elif isinstance(value, str) and value.strip().isdigit():
            index = int(value.strip())
        elif isinstance(value, str):
            name = value.strip().replace(" ", "_").upper()
            if name not in cls.__members__:
                raise MalformedContentError(
                    f"Cannot interpret {value!r} as a position. Pick one from {', '.join(p.name.lower() for p in cls)}"
                )
            return cls[name]
        else:
            raise MalformedContentError(f"Cannot interpret {value!r} as a position.")

        if not 0 <= index < len(cls):
            raise MalformedContentError(
                f"Position {index} is outside of the board (0 - {len(cls) - 1})."
            )
        return cls(index)

    @property
    def row(self) -> int:
        return self.value // BOARD_DIMENSIONS[0]

    @property
    def column(self) -> int:
        return self.value % BOARD_DIMENSIONS[0]


WINNING_COMBINATIONS: tuple[tuple[Position, Position, Position], ...] = (
    # rows
    (Position.TOP_LEFT, Position.TOP_CENTER, Position.TOP_RIGHT),
    (Position.CENTER_LEFT, Position.CENTER, Position.CENTER_RIGHT),
    (Position.BOTTOM_LEFT, Position.BOTTOM_CENTER, Position.BOTTOM_RIGHT),
    # columns
    (Position.TOP_LEFT, Position.CENTER_LEFT, Position.BOTTOM_LEFT),
    (Position.TOP_CENTER, Position.CENTER, Position.BOTTOM_CENTER),
    (Position.TOP_RIGHT, Position.CENTER_RIGHT, Position.BOTTOM_RIGHT),
    # diagonals
    (Position.TOP_LEFT, Position.CENTER, Position.BOTTOM_RIGHT),
    (Position.TOP_RIGHT, Position.CENTER, Position.BOTTOM_LEFT),
)
