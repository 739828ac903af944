"""Protocol for the game rules (the session only needs this narrow interface, the tic-tac-toe Game is one implementation)"""

from typing import Protocol

from src.core.shared_types import Side
from src.tictactoe.board import Board
from src.tictactoe.game import GameResult
from src.tictactoe.position import Position


class GameService(Protocol):
    """Board state and turn rules"""

    def start_game(self) -> Board:
        """Start (or restart) with an empty board and return it."""
        ...

    def choose_square(self, position: Position, side: Side) -> Board:
        """Play `side` on `position`. Illegal attempts return the board unchanged."""
        ...

    def board(self) -> Board:
        """Current board snapshot."""
        ...

    def is_started(self) -> bool: ...

    def is_game_over(self) -> bool: ...

    def get_result(self) -> GameResult:
        """Winner (if any) and winning combination of a finished game."""
        ...
