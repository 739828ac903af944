"""Custom exceptions. Every layer raises a subclass of GameError so callers can catch the whole family at once."""


class GameError(Exception):
    """Base class of all errors raised by the session and the game rules."""


# --- Protocol errors: recovered by the processing loop (logged, nothing broadcast)
class ProtocolError(GameError):
    """The content of a message could not be understood."""


class MalformedContentError(ProtocolError):
    """Side, position or envelope could not be parsed."""


class UnrecognizedInstructionError(ProtocolError):
    """The instruction of a message is not one the session knows how to execute."""


# --- Rejected actions: a normal outcome, not a fault
class RejectedActionError(GameError):
    """Action is not allowed in the current session state (side taken, spectator starting the game, ...)"""


# --- Fatal
class BroadcastError(GameError):
    """Writing a response to one of the clients failed. Fan-out can no longer be trusted."""
