"""Websocket link between a client replica and the replication hub."""

import logging
from dataclasses import dataclass

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosedError

from photoboard.domain.events import (
    MessageEvent,
    PhotoEvent,
    encode_event,
    parse_server_event,
)
from photoboard.services.replica import ClientReplica
from photoboard.services.viewer import HubTransport

logger = logging.getLogger(__name__)


@dataclass
class WebsocketHubClient(HubTransport):
    """Feed hub events into a replica and send local events to the hub."""

    url: str
    replica: ClientReplica
    connection: ClientConnection | None = None

    async def run(self) -> None:
        """Connect and reconcile inbound events until the socket closes."""
        async with connect(self.url) as websocket:
            self.connection = websocket
            try:
                async for frame in websocket:
                    self.handle_frame(frame)
            except ConnectionClosedError:
                logger.warning("Hub connection lost", extra={"url": self.url})
            finally:
                self.connection = None

    def handle_frame(self, frame: str | bytes) -> None:
        """Apply one inbound frame to the replica; malformed frames are dropped."""
        event = parse_server_event(frame)
        if event is None:
            return
        self.replica.apply(event)

    async def send_event(self, event: PhotoEvent | MessageEvent) -> None:
        """Send a locally originated event to the hub."""
        if self.connection is None:
            raise RuntimeError("Hub client is not connected")
        await self.connection.send(encode_event(event))
