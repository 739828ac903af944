"""
Messages and Responses

Inbound: {"instruction": "choose square", "content": 4}
Outbound: {"responseKind": "board", "body": ["", "", "", "", "X", "", "", "", ""]}

The response kind is always written as its lowercase name, never as its position in the ResponseKind enum.
"""

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from src.core.exceptions import MalformedContentError
from src.core.shared_types import Instruction, ResponseKind, Side
from src.session.client import Client
from src.tictactoe.board import Board
from src.tictactoe.game import GameResult


# --- MESSAGES (client -> session) ---
@dataclass(frozen=True)
class GameMessage:
    """An instruction issued by a client. Content is a side, a position, or unused, depending on the instruction."""

    instruction: Instruction | str
    content: Any
    client: Client


class InboundMessage(BaseModel):
    """Wire envelope of a GameMessage, before the origin client is attached."""

    model_config = ConfigDict(frozen=True)

    instruction: str
    content: Any = None

    @field_validator("instruction")
    @classmethod
    def normalize_instruction(cls, value: str) -> str:
        return value.strip().lower()

    @classmethod
    def from_wire(cls, data: Any) -> "InboundMessage":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise MalformedContentError(f"Cannot read message {data!r}: {exc}") from exc

    @classmethod
    def from_json(cls, raw: str | bytes) -> "InboundMessage":
        """Same as from_wire(), for a raw text frame."""
        try:
            return cls.model_validate_json(raw)
        except ValidationError as exc:
            raise MalformedContentError(f"Cannot read message {raw!r}: {exc}") from exc

    def to_message(self, client: Client) -> GameMessage:
        return GameMessage(self.instruction, self.content, client)


# --- RESPONSE BODIES ---
class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ResultBody(_WireModel):
    winning_combination: list[int]
    winning_character: Side
    has_winner: bool

    @classmethod
    def from_result(cls, result: GameResult) -> "ResultBody":
        return cls(
            winning_combination=[int(p) for p in result.winning_combination],
            winning_character=result.winning_character,
            has_winner=result.has_winner,
        )


class WelcomeBody(_WireModel):
    """Sent to a client right after it connected, so it can catch up with the session."""

    is_game_started: bool
    x_client: str
    o_client: str
    board: list[Side]


# --- RESPONSES (session -> every client) ---
class BoardResponse(_WireModel):
    response_kind: Literal[ResponseKind.BOARD] = ResponseKind.BOARD
    body: list[Side]


class GameOverResponse(_WireModel):
    response_kind: Literal[ResponseKind.GAME_OVER] = ResponseKind.GAME_OVER
    body: bool


class ResultResponse(_WireModel):
    response_kind: Literal[ResponseKind.RESULT] = ResponseKind.RESULT
    body: ResultBody


class NewMessageResponse(_WireModel):
    response_kind: Literal[ResponseKind.NEW_MESSAGE] = ResponseKind.NEW_MESSAGE
    body: str


class CharacterSelectedResponse(_WireModel):
    response_kind: Literal[ResponseKind.CHARACTER_SELECTED] = (
        ResponseKind.CHARACTER_SELECTED
    )
    body: Side


class GameStartedResponse(_WireModel):
    response_kind: Literal[ResponseKind.GAME_STARTED] = ResponseKind.GAME_STARTED
    body: bool


class WelcomeResponse(_WireModel):
    response_kind: Literal[ResponseKind.WELCOME] = ResponseKind.WELCOME
    body: WelcomeBody


GameResponse = Annotated[
    Union[
        BoardResponse,
        GameOverResponse,
        ResultResponse,
        NewMessageResponse,
        CharacterSelectedResponse,
        GameStartedResponse,
        WelcomeResponse,
    ],
    Field(discriminator="response_kind"),
]

_RESPONSE_ADAPTER: TypeAdapter[GameResponse] = TypeAdapter(GameResponse)


def board_response(board: Board) -> BoardResponse:
    return BoardResponse(body=list(board.squares))


def result_response(result: GameResult) -> ResultResponse:
    return ResultResponse(body=ResultBody.from_result(result))


def to_wire(response: GameResponse) -> dict[str, Any]:
    """{"responseKind": <lowercase name>, "body": ...}"""
    return response.model_dump(mode="json", by_alias=True)


def parse_response(data: Any) -> GameResponse:
    """Reverse of to_wire(). Unknown response kinds raise MalformedContentError."""
    try:
        return _RESPONSE_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise MalformedContentError(f"Cannot read response {data!r}: {exc}") from exc
