"""Websocket endpoint feeding replica connections into the hub."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastapi import APIRouter, WebSocket
from starlette.websockets import WebSocketState

if TYPE_CHECKING:
    from photoboard.containers import AppContainer


router = APIRouter(tags=["replication"])


@dataclass(eq=False)
class WebSocketConnection:
    """Hub connection backed by a Starlette websocket."""

    websocket: WebSocket

    @property
    def is_open(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def send_text(self, data: str) -> None:
        await self.websocket.send_text(data)


@router.websocket("/")
@router.websocket("/ws")
async def replication_socket(websocket: WebSocket) -> None:
    """Join the hub, then forward every inbound frame until disconnect."""
    container: AppContainer = websocket.app.state.container
    await websocket.accept()
    connection = WebSocketConnection(websocket)
    await container.hub.connect(connection)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            frame = message.get("text")
            if frame is None:
                frame = message.get("bytes")
            if frame is None:
                continue
            await container.hub.handle_message(connection, frame)
    finally:
        container.hub.disconnect(connection)
