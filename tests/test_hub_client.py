"""Tests for the websocket hub client."""

import asyncio
import json
from dataclasses import dataclass, field

import pytest

from photoboard.adapters.hub_client import WebsocketHubClient
from photoboard.domain.events import MessageEvent
from photoboard.domain.models import Message
from photoboard.services.replica import ClientReplica


@dataclass
class FakeClientConnection:
    sent: list[str] = field(default_factory=list)

    async def send(self, message: str) -> None:
        self.sent.append(message)


def test_handle_frame_applies_events_to_replica() -> None:
    replica = ClientReplica()
    client = WebsocketHubClient(url="ws://board.test/ws", replica=replica)

    client.handle_frame(
        json.dumps(
            {
                "type": "history",
                "photos": [
                    {
                        "id": "p1",
                        "src": "data:image/jpeg;base64,AAAA",
                        "uploadDate": "now",
                        "messages": [],
                    }
                ],
                "isSiteClosed": True,
            }
        )
    )
    client.handle_frame(json.dumps({"type": "site-opened"}))

    assert [photo.id for photo in replica.photos] == ["p1"]
    assert replica.is_site_closed is False


def test_handle_frame_drops_malformed_frames() -> None:
    replica = ClientReplica()
    client = WebsocketHubClient(url="ws://board.test/ws", replica=replica)

    client.handle_frame("garbage")
    client.handle_frame(json.dumps({"type": "photo", "photo": {"id": "p1"}}))

    assert replica.photos == []


def test_send_event_requires_connection() -> None:
    client = WebsocketHubClient(url="ws://board.test/ws", replica=ClientReplica())
    event = MessageEvent(photo_id="p1", message=Message(date="D1", text="hi"))

    with pytest.raises(RuntimeError):
        asyncio.run(client.send_event(event))


def test_send_event_encodes_wire_names() -> None:
    connection = FakeClientConnection()
    client = WebsocketHubClient(
        url="ws://board.test/ws",
        replica=ClientReplica(),
        connection=connection,  # type: ignore[arg-type]
    )
    event = MessageEvent(photo_id="p1", message=Message(date="D1", text="hi"))

    asyncio.run(client.send_event(event))

    assert json.loads(connection.sent[0]) == {
        "type": "message",
        "photoId": "p1",
        "message": {"date": "D1", "text": "hi"},
    }
