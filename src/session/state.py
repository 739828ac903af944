"""
The Session: everything one coordinator mutates.

Handlers receive the Session explicitly instead of reaching for module level state,
so running several independent sessions only requires several Session objects.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.core.exceptions import RejectedActionError
from src.core.shared_types import SessionState, Side
from src.services.game_service import GameService
from src.session.client import Client
from src.session.registry import ClientRegistry
from src.tictactoe.game import TicTacToeGame

# States only move forward
STATE_ORDER: tuple[SessionState, ...] = (
    SessionState.LOBBY,
    SessionState.IN_PROGRESS,
    SessionState.OVER,
)


@dataclass
class Session:
    game: GameService = field(default_factory=TicTacToeGame)
    registry: ClientRegistry = field(default_factory=ClientRegistry)
    x_client: Optional[Client] = None
    o_client: Optional[Client] = None
    state: SessionState = SessionState.LOBBY

    def holder(self, side: Side) -> Optional[Client]:
        if side == Side.X:
            return self.x_client
        if side == Side.O:
            return self.o_client
        return None

    def join(self, client: Client) -> None:
        self.registry.add(client)

    def release(self, client: Client) -> bool:
        """Remove the client and free its seat. False if the client was not registered."""
        side = self.registry.remove(client)
        if side is None:
            return False
        if self.x_client is client:
            self.x_client = None
        if self.o_client is client:
            self.o_client = None
        return True

    def select_side(self, client: Client, side: Side) -> None:
        """
        Seat a client on X or O.
        ----

        * a side held by another client cannot be taken
        * a client holding a side cannot switch to the other one
        * selecting the side you already hold changes nothing
        """
        if client not in self.registry:
            raise RejectedActionError(f"{client!r} is not registered in this session.")

        holder = self.holder(side)
        if holder is client:
            return
        if holder is not None:
            raise RejectedActionError(f"Side {side} is already taken by {holder!r}.")

        current = self.registry.side_of(client)
        if current != Side.EMPTY:
            raise RejectedActionError(
                f"{client!r} already plays {current}, cannot switch to {side}."
            )

        self.registry.assign(client, side)
        if side == Side.X:
            self.x_client = client
        else:
            self.o_client = client

    def assert_can_start(self, client: Client) -> None:
        """Only one of the two seated players can start, and only once both seats are taken."""
        if self.state != SessionState.LOBBY:
            raise RejectedActionError(f"Game cannot be started. state: {self.state}")

        if self.x_client is None or self.o_client is None:
            raise RejectedActionError("Both X and O must be selected before starting.")

        if self.x_client is self.o_client:
            raise RejectedActionError("X and O must be played by different clients.")

        if client is not self.x_client and client is not self.o_client:
            raise RejectedActionError(f"Spectator {client!r} cannot start the game.")

    def advance(self, new_state: SessionState) -> None:
        if STATE_ORDER.index(new_state) <= STATE_ORDER.index(self.state):
            raise RejectedActionError(
                f"Cannot move from {self.state!r} back to {new_state!r}."
            )
        self.state = new_state
