"""Which clients are connected, and which side each of them holds."""

from typing import Iterator

from src.core.shared_types import Side
from src.session.client import Client


class ClientRegistry:
    """
    Mapping Client -> Side.
    ----

    Invariants:
    * one entry per connected client (adding twice does not duplicate)
    * at most one client per non-empty side
    """

    def __init__(self) -> None:
        self._sides: dict[Client, Side] = {}

    def add(self, client: Client) -> None:
        self._sides.setdefault(client, Side.EMPTY)

    def remove(self, client: Client) -> Side | None:
        """Returns the side the client held, or None if it was not registered."""
        return self._sides.pop(client, None)

    def side_of(self, client: Client) -> Side:
        return self._sides.get(client, Side.EMPTY)

    def holder_of(self, side: Side) -> Client | None:
        if side == Side.EMPTY:
            return None
        return next((c for c, s in self._sides.items() if s == side), None)

    def assign(self, client: Client, side: Side) -> None:
        if client not in self._sides:
            raise KeyError(f"{client!r} is not registered.")
        holder = self.holder_of(side)
        if holder is not None and holder is not client:
            raise ValueError(f"Side {side} is already held by {holder!r}.")
        self._sides[client] = side

    def as_dict(self) -> dict[Client, Side]:
        return dict(self._sides)

    def __contains__(self, client: object) -> bool:
        return client in self._sides

    def __iter__(self) -> Iterator[Client]:
        # snapshot: the registry may change while a caller is still iterating
        return iter(list(self._sides))

    def __len__(self) -> int:
        return len(self._sides)
