"""Replication hub: connection registry, join snapshots and fan-out."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from photoboard.domain.events import (
    HistoryEvent,
    MessageEvent,
    PhotoEvent,
    SiteClosedEvent,
    SiteOpenedEvent,
    WipeEvent,
    encode_event,
    parse_client_event,
)
from photoboard.services.persistence import PersistenceGateway
from photoboard.services.state import SharedStateStore

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """Outbound side of one live client connection."""

    @property
    def is_open(self) -> bool:
        """Return true while the connection can accept frames."""

    async def send_text(self, data: str) -> None:
        """Send one text frame."""


@dataclass(eq=False)
class _Outbox:
    """Unbounded frame queue for one connection, drained by its own writer."""

    connection: Connection
    queue: asyncio.Queue[str] = field(default_factory=asyncio.Queue)
    writer: asyncio.Task[None] | None = None

    def start(self) -> None:
        self.writer = asyncio.get_running_loop().create_task(self._drain())

    def put(self, payload: str) -> None:
        self.queue.put_nowait(payload)

    def close(self) -> None:
        if self.writer is not None:
            self.writer.cancel()
        while not self.queue.empty():
            self.queue.get_nowait()
            self.queue.task_done()

    async def _drain(self) -> None:
        while True:
            payload = await self.queue.get()
            try:
                if self.connection.is_open:
                    await self.connection.send_text(payload)
            except Exception:
                logger.exception("Failed to deliver event to replica")
            finally:
                self.queue.task_done()


@dataclass
class ReplicationHub:
    """Apply client mutations to the store and replicate them to every replica.

    Each inbound event is applied, persisted and queued for every connection
    under one lock, so the store and every connection observe events in hub
    arrival order. Frames are written by one task per connection; a slow
    reader only delays its own queue.
    """

    store: SharedStateStore
    persistence: PersistenceGateway
    _outboxes: dict[Connection, _Outbox] = field(
        default_factory=dict, init=False, repr=False
    )
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    @property
    def connections(self) -> list[Connection]:
        """Currently registered connections, in join order."""
        return list(self._outboxes)

    async def connect(self, connection: Connection) -> None:
        """Register a connection and queue the current snapshot for it."""
        async with self._lock:
            outbox = _Outbox(connection)
            outbox.start()
            self._outboxes[connection] = outbox
            snapshot = self.store.snapshot()
            outbox.put(encode_event(HistoryEvent.from_snapshot(snapshot)))
            if snapshot.is_site_closed:
                outbox.put(encode_event(SiteClosedEvent()))
        logger.info(
            "Replica connected",
            extra={"connections": len(self._outboxes)},
        )

    def disconnect(self, connection: Connection) -> None:
        """Forget a connection and stop its writer, dropping unsent frames."""
        outbox = self._outboxes.pop(connection, None)
        if outbox is not None:
            outbox.close()
        logger.info(
            "Replica disconnected",
            extra={"connections": len(self._outboxes)},
        )

    async def handle_message(self, connection: Connection, raw: str | bytes) -> None:
        """Apply one inbound frame from a connection and fan it out."""
        event = parse_client_event(raw)
        if event is None:
            return
        async with self._lock:
            if isinstance(event, PhotoEvent):
                self.store.append_photo(event.photo)
            elif not self.store.append_message(event.photo_id, event.message):
                logger.debug(
                    "Message for unknown photo ignored",
                    extra={"photo_id": event.photo_id},
                )
                return
            self.persistence.save(self.store.snapshot())
            self.broadcast(event, exclude=connection)

    def broadcast(
        self,
        event: PhotoEvent
        | MessageEvent
        | WipeEvent
        | SiteClosedEvent
        | SiteOpenedEvent,
        exclude: Connection | None = None,
    ) -> int:
        """Queue an event for every open connection except ``exclude``.

        Returns the number of connections the event was queued for.
        """
        payload = encode_event(event)
        queued = 0
        for connection, outbox in list(self._outboxes.items()):
            if connection is exclude or not connection.is_open:
                continue
            outbox.put(payload)
            queued += 1
        return queued

    async def flush(self) -> None:
        """Wait until every queued frame has been handed to its connection."""
        await asyncio.gather(
            *(outbox.queue.join() for outbox in list(self._outboxes.values()))
        )

    def close(self) -> None:
        """Disconnect every connection and stop all writers."""
        for connection in list(self._outboxes):
            self.disconnect(connection)

    async def wipe(self) -> None:
        """Clear the board everywhere; a closed site is reopened as well."""
        async with self._lock:
            was_closed = self.store.is_site_closed
            self.store.wipe()
            self.persistence.save(self.store.snapshot())
            self.broadcast(WipeEvent())
            if was_closed:
                self.broadcast(SiteOpenedEvent())
        logger.info("All data wiped")

    async def close_site(self) -> None:
        """Close the site for every replica."""
        async with self._lock:
            self.store.set_status(is_open=False)
            self.persistence.save(self.store.snapshot())
            self.broadcast(SiteClosedEvent())
        logger.info("Site closed")

    async def open_site(self) -> None:
        """Reopen the site for every replica."""
        async with self._lock:
            self.store.set_status(is_open=True)
            self.persistence.save(self.store.snapshot())
            self.broadcast(SiteOpenedEvent())
        logger.info("Site opened")
