"""Transport glue: one websocket per client, every frame is handed to the session coordinator."""

from typing import Optional

import structlog
from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect

from src.api.models import HealthResponse
from src.core.exceptions import MalformedContentError
from src.session.client import DEFAULT_CLIENT_NAME, Client
from src.session.coordinator import SessionCoordinator
from src.session.protocol import InboundMessage

logger = structlog.get_logger(__name__)

router = APIRouter()


def _coordinator(app_state: object) -> SessionCoordinator:
    return app_state.coordinator  # type: ignore[attr-defined]


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    coordinator = _coordinator(request.app.state)
    return HealthResponse(
        status="ok",
        state=coordinator.state,
        clients=len(coordinator.clients()),
        dispatching=coordinator.is_dispatching,
    )


async def _receive_frame(websocket: WebSocket) -> Optional[str | bytes]:
    """Next text or binary frame. None for frames carrying neither."""
    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
    if message.get("text") is not None:
        return message["text"]
    return message.get("bytes")


@router.websocket("/gamews")
async def game_socket(websocket: WebSocket, name: str = DEFAULT_CLIENT_NAME) -> None:
    """
    Client lifecycle
    ----
    accept -> register, each frame -> broadcast(message), socket gone (for whatever reason) -> unregister
    """
    coordinator = _coordinator(websocket.app.state)
    await websocket.accept()

    client = Client(connection=websocket, name=name.strip() or DEFAULT_CLIENT_NAME)
    try:
        await coordinator.register(client)
        while True:
            raw = await _receive_frame(websocket)
            if raw is None:
                logger.warning("empty frame dropped", client=client.name)
                continue
            try:
                inbound = InboundMessage.from_json(raw)
            except MalformedContentError as exc:
                logger.warning("frame dropped", client=client.name, reason=str(exc))
                continue
            await coordinator.broadcast(inbound.to_message(client))
    except WebSocketDisconnect:
        pass
    finally:
        await coordinator.unregister(client)
