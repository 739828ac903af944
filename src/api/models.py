"""HTTP response models (the websocket speaks the protocol in src/session/protocol.py)"""

from pydantic import BaseModel

from src.core.shared_types import SessionState


class HealthResponse(BaseModel):
    status: str
    state: SessionState
    clients: int
    dispatching: bool
