"""
The Game class is the entrypoint into the domain layer for the session layer.
It owns the board and the turn rules: who is to move, which squares are free, and when the game is over.
The session never mutates a Board itself, it only embeds the snapshots returned from here in its responses.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.shared_types import Side
from src.tictactoe.board import Board, opponent
from src.tictactoe.position import WINNING_COMBINATIONS, Position


@dataclass(frozen=True)
class GameResult:
    """Outcome of a finished game. A draw has no winner and no winning combination."""

    winning_combination: tuple[Position, ...] = ()
    winning_character: Side = Side.EMPTY
    has_winner: bool = False

    @classmethod
    def draw(cls) -> Self:
        return cls()

    @classmethod
    def win(cls, side: Side, combination: tuple[Position, ...]) -> Self:
        return cls(
            winning_combination=combination, winning_character=side, has_winner=True
        )


@dataclass
class TicTacToeGame:
    """In-memory implementation of the GameService boundary."""

    board_state: Board = field(default_factory=Board.empty)
    side_to_move: Side = Side.X
    started: bool = False

    # --- GAME SERVICE API CALLED BY THE SESSION ---
    def start_game(self) -> Board:
        """Clear the board. X always opens."""
        self.board_state = Board.empty()
        self.side_to_move = Side.X
        self.started = True
        return self.board_state

    def choose_square(self, position: Position, side: Side) -> Board:
        """
        Attempt to place `side` on `position`.
        ----

        An illegal attempt is not an error: the board is simply returned unchanged.
        Illegal means any of
        1. the game has not started yet, or is already over
        2. it is not `side`'s turn (a spectator, with side EMPTY, never has the turn)
        3. the square is already taken
        """
        if not self.started or self.is_game_over():
            return self.board_state

        if side != self.side_to_move:
            return self.board_state

        if not self.board_state.is_free(position):
            return self.board_state

        self.board_state = self.board_state.place(position, side)
        self.side_to_move = opponent(side)
        return self.board_state

    def board(self) -> Board:
        return self.board_state

    def is_started(self) -> bool:
        return self.started

    def is_game_over(self) -> bool:
        return self._winner() is not None or self.board_state.is_full()

    def get_result(self) -> GameResult:
        winner = self._winner()
        if winner is None:
            return GameResult.draw()
        side, combination = winner
        return GameResult.win(side, combination)

    # -- PRIVATE HELPERS ---
    def _winner(self) -> Optional[tuple[Side, tuple[Position, ...]]]:
        for combination in WINNING_COMBINATIONS:
            first, *rest = (self.board_state.side_at(p) for p in combination)
            if first != Side.EMPTY and all(side == first for side in rest):
                return first, combination
        return None
