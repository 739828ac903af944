"""
Dispatch strategies: how coordinator events get scheduled.

Both strategies guarantee that no two handlers ever run concurrently against the same session.
* SynchronousStrategy: no concurrency at all, the handler runs inline before the call returns.
* AsynchronousStrategy: any number of producers enqueue events, a single consumer task runs the handlers.
"""

from __future__ import annotations

import asyncio
from contextlib import suppress
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional, Protocol

import structlog

from src.core.exceptions import BroadcastError
from src.session.client import Client
from src.session.protocol import GameMessage

if TYPE_CHECKING:
    from src.session.coordinator import SessionCoordinator

logger = structlog.get_logger(__name__)


class DispatchStrategy(Protocol):
    """Scheduling policy chosen when the coordinator is constructed."""

    async def register(self, pool: SessionCoordinator, client: Client) -> None: ...

    async def unregister(self, pool: SessionCoordinator, client: Client) -> None: ...

    async def broadcast(self, pool: SessionCoordinator, message: GameMessage) -> None: ...

    def start(self) -> None:
        """Begin processing events (if the strategy has anything to run)."""
        ...

    async def stop(self) -> None: ...

    @property
    def is_running(self) -> bool:
        """False once the strategy can no longer process events."""
        ...


class SynchronousStrategy:
    """Run every handler inline. Each call is fully applied (responses included) before it returns."""

    async def register(self, pool: SessionCoordinator, client: Client) -> None:
        await pool.handle_register(client)

    async def unregister(self, pool: SessionCoordinator, client: Client) -> None:
        await pool.handle_unregister(client)

    async def broadcast(self, pool: SessionCoordinator, message: GameMessage) -> None:
        await pool.handle_message(message)

    def start(self) -> None:
        pass

    async def stop(self) -> None:
        pass

    @property
    def is_running(self) -> bool:
        return True


class EventKind(Enum):
    REGISTER = auto()
    UNREGISTER = auto()
    MESSAGE = auto()


@dataclass(frozen=True)
class Event:
    kind: EventKind
    pool: SessionCoordinator
    payload: Client | GameMessage


class AsynchronousStrategy:
    """
    Hand events to an unbounded queue read by exactly one long-lived task.
    ----

    Submitting never waits for the handler. Events are handled in the order they entered the queue.
    A failed broadcast stops the consumer for good: events submitted afterwards are dropped.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._task: Optional[asyncio.Task[None]] = None

    # -- submission (producers) --
    async def register(self, pool: SessionCoordinator, client: Client) -> None:
        self._submit(Event(EventKind.REGISTER, pool, client))

    async def unregister(self, pool: SessionCoordinator, client: Client) -> None:
        self._submit(Event(EventKind.UNREGISTER, pool, client))

    async def broadcast(self, pool: SessionCoordinator, message: GameMessage) -> None:
        self._submit(Event(EventKind.MESSAGE, pool, message))

    # -- lifecycle --
    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self.run(), name="session-dispatch")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def join(self) -> None:
        """Wait until every event submitted so far has been handled."""
        await self._queue.join()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def task(self) -> Optional[asyncio.Task[None]]:
        return self._task

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    # -- consumer --
    async def run(self) -> None:
        """The single writer. Returns only when a broadcast fails."""
        logger.info("dispatch loop started")
        while True:
            event = await self._queue.get()
            try:
                await self._dispatch(event)
            except BroadcastError:
                logger.critical(
                    "broadcast failed, dispatch loop stopped",
                    event=event.kind.name,
                    pending=self._queue.qsize(),
                    exc_info=True,
                )
                return
            finally:
                self._queue.task_done()

    async def _dispatch(self, event: Event) -> None:
        match event.kind:
            case EventKind.REGISTER:
                await event.pool.handle_register(event.payload)  # type: ignore[arg-type]
            case EventKind.UNREGISTER:
                await event.pool.handle_unregister(event.payload)  # type: ignore[arg-type]
            case EventKind.MESSAGE:
                await event.pool.handle_message(event.payload)  # type: ignore[arg-type]

    def _submit(self, event: Event) -> None:
        if self._task is not None and self._task.done():
            logger.warning(
                "dispatch loop has stopped, event will not be processed",
                event=event.kind.name,
            )
            return
        self._queue.put_nowait(event)
