"""The Game board: which side occupies which square. Boards are snapshots, every change creates a new Board."""

from dataclasses import dataclass, field
from typing import Any, Self

from src.core.exceptions import MalformedContentError
from src.core.shared_types import Side
from src.tictactoe.position import Position

PLAYABLE_SIDES: tuple[Side, ...] = (Side.X, Side.O)


def parse_side(value: Any) -> Side:
    """Side requested by a client. Only X or O can be selected."""
    if isinstance(value, str) and value.strip().upper() in PLAYABLE_SIDES:
        return Side(value.strip().upper())
    raise MalformedContentError(
        f"Cannot interpret {value!r} as a side. Pick one from {', '.join(PLAYABLE_SIDES)}."
    )


def opponent(side: Side) -> Side:
    if side == Side.EMPTY:
        raise ValueError("An empty square has no opponent.")
    return Side.O if side == Side.X else Side.X


@dataclass(frozen=True)
class Board:
    squares: tuple[Side, ...] = field(
        default_factory=lambda: tuple(Side.EMPTY for _ in Position)
    )

    def __post_init__(self) -> None:
        if len(self.squares) != len(Position):
            raise ValueError(
                f"A board has exactly {len(Position)} squares, got {len(self.squares)}."
            )

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def from_list(cls, squares: list[str]) -> Self:
        """Reverse of to_list(): ["X", "", "O", ...]"""
        return cls(tuple(Side(square) for square in squares))

    def to_list(self) -> list[str]:
        return [str(square) for square in self.squares]

    def side_at(self, position: Position) -> Side:
        return self.squares[position]

    def is_free(self, position: Position) -> bool:
        return self.side_at(position) == Side.EMPTY

    def place(self, position: Position, side: Side) -> Self:
        """New board with the square taken by `side`. Does not check whose turn it is, the Game does that."""
        if not self.is_free(position):
            raise ValueError(f"{position.name} is already taken by {self.side_at(position)}.")
        squares = list(self.squares)
        squares[position] = side
        return type(self)(tuple(squares))

    def positions_of(self, side: Side) -> list[Position]:
        return [position for position in Position if self.side_at(position) == side]

    def count(self, side: Side) -> int:
        return len(self.positions_of(side))

    def is_full(self) -> bool:
        return Side.EMPTY not in self.squares

    def __str__(self) -> str:
        rows = [
            " | ".join(str(self.squares[row * 3 + col]) or " " for col in range(3))
            for row in range(3)
        ]
        return "\n".join(rows)
