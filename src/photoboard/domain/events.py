"""Wire events exchanged between the hub and client replicas."""

import logging
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from photoboard.domain.models import Message, Photo, SiteSnapshot

logger = logging.getLogger(__name__)


class _Event(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class HistoryEvent(_Event):
    """Full snapshot sent once to each newly joined connection."""

    type: Literal["history"] = "history"
    photos: list[Photo] = Field(default_factory=list)
    is_site_closed: bool = Field(default=False, alias="isSiteClosed")

    @classmethod
    def from_snapshot(cls, snapshot: SiteSnapshot) -> "HistoryEvent":
        """Build a history event from a store snapshot."""
        return cls(photos=snapshot.photos, is_site_closed=snapshot.is_site_closed)


class PhotoEvent(_Event):
    """New photo announcement."""

    type: Literal["photo"] = "photo"
    photo: Photo


class MessageEvent(_Event):
    """New message announcement for an existing photo."""

    type: Literal["message"] = "message"
    photo_id: str = Field(alias="photoId")
    message: Message


class WipeEvent(_Event):
    """Global clear of every photo."""

    type: Literal["wipe"] = "wipe"


class SiteClosedEvent(_Event):
    """The site was closed by a privileged action."""

    type: Literal["site-closed"] = "site-closed"


class SiteOpenedEvent(_Event):
    """The site was reopened by a privileged action."""

    type: Literal["site-opened"] = "site-opened"


ClientEvent = Annotated[PhotoEvent | MessageEvent, Field(discriminator="type")]
ServerEvent = Annotated[
    HistoryEvent
    | PhotoEvent
    | MessageEvent
    | WipeEvent
    | SiteClosedEvent
    | SiteOpenedEvent,
    Field(discriminator="type"),
]

_CLIENT_EVENTS = TypeAdapter(ClientEvent)
_SERVER_EVENTS = TypeAdapter(ServerEvent)


def parse_client_event(raw: str | bytes) -> PhotoEvent | MessageEvent | None:
    """Parse an event sent by a client, returning None when it is malformed."""
    try:
        return _CLIENT_EVENTS.validate_json(raw)
    except ValidationError as exc:
        logger.warning(
            "Dropping malformed client event",
            extra={"errors": exc.error_count()},
        )
        return None


def parse_server_event(raw: str | bytes) -> ServerEvent | None:
    """Parse an event sent by the hub, returning None when it is malformed."""
    try:
        return _SERVER_EVENTS.validate_json(raw)
    except ValidationError as exc:
        logger.warning(
            "Dropping malformed server event",
            extra={"errors": exc.error_count()},
        )
        return None


def encode_event(event: _Event) -> str:
    """Encode an event as a JSON text frame using wire field names."""
    return event.model_dump_json(by_alias=True)
