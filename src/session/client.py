"""A connected client: display name + the outbound write capability of its connection."""

from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import UUID, uuid4

DEFAULT_CLIENT_NAME = "Unknown"


class Connection(Protocol):
    """Outbound half of a transport connection (a Starlette WebSocket satisfies this)."""

    async def send_json(self, data: Any) -> None:
        """Send one framed message. Raises if the connection is broken."""
        ...


# eq=False: two clients with the same name are still different clients (hash/compare by identity)
@dataclass(eq=False)
class Client:
    connection: Connection
    name: str = DEFAULT_CLIENT_NAME
    id: UUID = field(default_factory=uuid4)

    async def send(self, payload: dict[str, Any]) -> None:
        await self.connection.send_json(payload)

    def __repr__(self) -> str:
        return f"Client(name={self.name!r}, id={str(self.id)[:8]})"
