"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/mocks required for testing multiple layers.
"""

import asyncio
from typing import Any, Awaitable, Callable

import pytest

from src.session.client import Client
from src.session.coordinator import SessionCoordinator
from src.session.strategy import SynchronousStrategy

ClientFactory = Callable[..., Awaitable[Client]]


class MockConnection:
    """
    Stand-in for a websocket: records every payload written to it, or fails on demand.
    With yield_on_write, every write hands control back to the event loop first (like a real socket would).
    """

    def __init__(self, fail: bool = False, yield_on_write: bool = False) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail = fail
        self.yield_on_write = yield_on_write

    async def send_json(self, data: Any) -> None:
        if self.yield_on_write:
            await asyncio.sleep(0)
        if self.fail:
            raise ConnectionError("connection closed")
        self.sent.append(data)

    def kinds(self) -> list[str]:
        return [payload["responseKind"] for payload in self.sent]

    def bodies(self, kind: str) -> list[Any]:
        return [payload["body"] for payload in self.sent if payload["responseKind"] == kind]

    def last(self) -> dict[str, Any]:
        return self.sent[-1]

    def clear(self) -> None:
        self.sent.clear()


@pytest.fixture
def pool() -> SessionCoordinator:
    """Coordinator running the synchronous strategy: every call is fully applied before the next statement."""
    return SessionCoordinator(SynchronousStrategy())


@pytest.fixture
def make_client(pool: SessionCoordinator) -> ClientFactory:
    """Create a client backed by a MockConnection and (by default) register it with the pool."""

    async def _make(name: str = "Tester", register: bool = True) -> Client:
        client = Client(connection=MockConnection(), name=name)
        if register:
            await pool.register(client)
        return client

    return _make
