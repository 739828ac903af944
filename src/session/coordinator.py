"""
Orchestration of a game session: connected clients, side selection, and the game itself.

Clients (via the transport) submit register/unregister/message events. The dispatch strategy decides how those
events get scheduled, but every event ends up in one of the `handle_*` methods below, which are never run concurrently.
Each handler executes against the game rules and broadcasts the resulting responses to every registered client.
"""

from typing import Any, Optional

import structlog

from src.core.exceptions import (
    BroadcastError,
    ProtocolError,
    RejectedActionError,
    UnrecognizedInstructionError,
)
from src.core.shared_types import Instruction, SessionState, Side
from src.services.game_service import GameService
from src.session.client import Client
from src.session.protocol import (
    CharacterSelectedResponse,
    GameMessage,
    GameOverResponse,
    GameResponse,
    GameStartedResponse,
    NewMessageResponse,
    WelcomeBody,
    WelcomeResponse,
    board_response,
    result_response,
    to_wire,
)
from src.session.state import Session
from src.session.strategy import DispatchStrategy
from src.tictactoe.board import parse_side
from src.tictactoe.position import Position

logger = structlog.get_logger(__name__)


class SessionCoordinator:
    """Owns one Session. Producers only ever call register / unregister / broadcast."""

    def __init__(
        self,
        strategy: DispatchStrategy,
        session: Optional[Session] = None,
        game: Optional[GameService] = None,
    ) -> None:
        self.strategy = strategy
        self.session = session if session is not None else Session()
        if game is not None:
            self.session.game = game

    # -- Producer API (routed through the strategy) ---
    async def register(self, client: Client) -> None:
        await self.strategy.register(self, client)

    async def unregister(self, client: Client) -> None:
        await self.strategy.unregister(self, client)

    async def broadcast(self, message: GameMessage) -> None:
        await self.strategy.broadcast(self, message)

    def start(self) -> None:
        self.strategy.start()

    async def stop(self) -> None:
        await self.strategy.stop()

    @property
    def is_dispatching(self) -> bool:
        return self.strategy.is_running

    # -- Read-only views (tests / health check) ---
    def clients(self) -> dict[Client, Side]:
        return self.session.registry.as_dict()

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def game(self) -> GameService:
        return self.session.game

    @property
    def x_client(self) -> Optional[Client]:
        return self.session.x_client

    @property
    def o_client(self) -> Optional[Client]:
        return self.session.o_client

    # -- Handlers (called by the strategy only) ---
    async def handle_register(self, client: Client) -> None:
        self.session.join(client)
        logger.info("client registered", client=client.name, clients=len(self.session.registry))

        await self._send(client, to_wire(self._welcome()))
        await self.broadcast_response(NewMessageResponse(body=f"{client.name} joined the game"))

    async def handle_unregister(self, client: Client) -> None:
        if not self.session.release(client):
            return
        logger.info("client unregistered", client=client.name, clients=len(self.session.registry))
        await self.broadcast_response(NewMessageResponse(body=f"{client.name} left the game"))

    async def handle_message(self, message: GameMessage) -> None:
        """
        Execute one instruction and broadcast its responses.
        ----

        Rejected actions and unreadable messages are logged and dropped: nobody receives anything.
        A BroadcastError is NOT recovered here, the caller decides what a broken fan-out means.
        """
        log = logger.bind(client=message.client.name, instruction=str(message.instruction))
        try:
            responses = self._execute(self.session, message)
        except RejectedActionError as exc:
            log.info("action rejected", reason=str(exc))
            return
        except ProtocolError as exc:
            log.warning("message could not be executed", reason=str(exc))
            return

        for response in responses:
            await self.broadcast_response(response)

    async def broadcast_response(self, response: GameResponse) -> None:
        """Write the response to every registered client. Stops at the first failed write."""
        payload = to_wire(response)
        for client in self.session.registry:
            await self._send(client, payload)

    # -- Instruction execution ---
    def _execute(self, session: Session, message: GameMessage) -> list[GameResponse]:
        instruction = self._parse_instruction(message.instruction)
        match instruction:
            case Instruction.SELECT_CHARACTER:
                return self._select_character(session, message)
            case Instruction.START_GAME:
                return self._start_game(session, message)
            case Instruction.CHOOSE_SQUARE:
                return self._choose_square(session, message)
            case Instruction.GET_BOARD:
                return [board_response(session.game.board())]

    def _select_character(self, session: Session, message: GameMessage) -> list[GameResponse]:
        side = parse_side(message.content)
        session.select_side(message.client, side)
        logger.info("character selected", client=message.client.name, side=str(side))
        return [CharacterSelectedResponse(body=side)]

    def _start_game(self, session: Session, message: GameMessage) -> list[GameResponse]:
        session.assert_can_start(message.client)
        board = session.game.start_game()
        session.advance(SessionState.IN_PROGRESS)
        logger.info("game started", started_by=message.client.name)
        return [board_response(board), GameStartedResponse(body=True)]

    def _choose_square(self, session: Session, message: GameMessage) -> list[GameResponse]:
        """
        Turn legality is the game's business: an illegal move just returns the same board,
        which still gets broadcast. The acting client's side goes along with the position.
        """
        position = Position.parse(message.content)
        side = session.registry.side_of(message.client)
        board = session.game.choose_square(position, side)
        responses: list[GameResponse] = [board_response(board)]

        if session.state == SessionState.IN_PROGRESS and session.game.is_game_over():
            session.advance(SessionState.OVER)
            result = session.game.get_result()
            logger.info(
                "game over",
                winner=str(result.winning_character) or None,
                has_winner=result.has_winner,
            )
            responses.extend([GameOverResponse(body=True), result_response(result)])
        return responses

    # -- Internal helpers ---
    def _parse_instruction(self, instruction: Instruction | str) -> Instruction:
        try:
            return Instruction(instruction)
        except ValueError:
            raise UnrecognizedInstructionError(
                f"GameInstruction could not be found: {instruction!r}"
            ) from None

    def _welcome(self) -> GameResponse:
        session = self.session
        return WelcomeResponse(
            body=WelcomeBody(
                is_game_started=session.game.is_started(),
                x_client=session.x_client.name if session.x_client else "",
                o_client=session.o_client.name if session.o_client else "",
                board=list(session.game.board().squares),
            )
        )

    async def _send(self, client: Client, payload: dict[str, Any]) -> None:
        try:
            await client.send(payload)
        except Exception as exc:
            raise BroadcastError(f"Could not write to {client!r}: {exc}") from exc
