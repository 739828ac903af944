"""
Type definitions used across layers
"""

from enum import StrEnum


class Side(StrEnum):
    """The marker a client plays with. EMPTY doubles as 'no side selected' and 'free square'."""

    EMPTY = ""
    X = "X"
    O = "O"  # noqa: E741


class SessionState(StrEnum):
    LOBBY = "lobby"
    IN_PROGRESS = "in progress"
    OVER = "over"


class Instruction(StrEnum):
    SELECT_CHARACTER = "select character"
    START_GAME = "start game"
    CHOOSE_SQUARE = "choose square"
    GET_BOARD = "get board"


# --- NOTE the string values are the wire format. Never serialize these by position in the enum.
class ResponseKind(StrEnum):
    BOARD = "board"
    GAME_OVER = "game over"
    RESULT = "result"
    NEW_MESSAGE = "new message"
    CHARACTER_SELECTED = "character selected"
    GAME_STARTED = "game started"
    WELCOME = "welcome"
