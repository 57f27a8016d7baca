"""Client-side mirror of the board and its reconciliation rules."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from photoboard.domain.events import (
    HistoryEvent,
    MessageEvent,
    PhotoEvent,
    ServerEvent,
    SiteClosedEvent,
    SiteOpenedEvent,
    WipeEvent,
)
from photoboard.domain.models import Message, Photo

logger = logging.getLogger(__name__)


class ReplicaView(Protocol):
    """Rendering surface driven by a replica."""

    def show_photo(self, photo: Photo | None, index: int | None, total: int) -> None:
        """Display the current photo, or the empty state when None."""

    def show_messages(self, messages: list[Message] | None) -> None:
        """Display the thread of the current photo."""

    def set_locked(self, locked: bool) -> None:
        """Apply or remove the closed-site lockout."""


@dataclass
class ClientReplica:
    """Local photos, the viewed pointer and the site status belief.

    Every inbound handler is idempotent so the hub echo of a local action
    leaves the replica unchanged.
    """

    view: ReplicaView | None = None
    photos: list[Photo] = field(default_factory=list)
    current_index: int | None = None
    is_site_closed: bool = False

    @property
    def current_photo(self) -> Photo | None:
        """Return the photo being viewed, if any."""
        if self.current_index is None:
            return None
        return self.photos[self.current_index]

    def find_photo(self, photo_id: str) -> Photo | None:
        """Return the local photo with the given id, if known."""
        for photo in self.photos:
            if photo.id == photo_id:
                return photo
        return None

    def apply(self, event: ServerEvent) -> None:
        """Reconcile one event received from the hub."""
        if isinstance(event, HistoryEvent):
            self.apply_history(event)
        elif isinstance(event, PhotoEvent):
            self.apply_photo(event.photo)
        elif isinstance(event, MessageEvent):
            self.apply_message(event.photo_id, event.message)
        elif isinstance(event, WipeEvent):
            self.apply_wipe()
        elif isinstance(event, SiteClosedEvent):
            self.apply_status(closed=True)
        elif isinstance(event, SiteOpenedEvent):
            self.apply_status(closed=False)

    def apply_history(self, event: HistoryEvent) -> None:
        """Replace local state with a join snapshot."""
        self.photos = list(event.photos)
        self.current_index = 0 if self.photos else None
        self.apply_status(closed=event.is_site_closed)
        self._refresh()

    def apply_photo(self, photo: Photo) -> bool:
        """Append an unseen photo and follow it; duplicates are ignored."""
        if self.find_photo(photo.id) is not None:
            return False
        self.photos.append(photo)
        self.current_index = len(self.photos) - 1
        self._refresh()
        return True

    def apply_message(self, photo_id: str, message: Message) -> bool:
        """Append an unseen message to a known photo."""
        photo = self.find_photo(photo_id)
        if photo is None:
            logger.debug(
                "Message for unknown photo dropped", extra={"photo_id": photo_id}
            )
            return False
        if photo.has_message(message):
            return False
        photo.messages.append(message)
        if photo is self.current_photo and self.view is not None:
            self.view.show_messages(photo.messages)
        return True

    def apply_wipe(self) -> None:
        """Drop every photo."""
        self.photos = []
        self.current_index = None
        self._refresh()

    def apply_status(self, closed: bool) -> None:
        """Record the site status and toggle the lockout."""
        self.is_site_closed = closed
        if self.view is not None:
            self.view.set_locked(closed)

    def add_local_photo(self, photo: Photo) -> None:
        """Apply a photo uploaded on this client before sending it."""
        self.apply_photo(photo)

    def add_local_message(self, message: Message) -> MessageEvent:
        """Append a message to the current photo and return the event to send."""
        photo = self.current_photo
        if photo is None:
            raise ValueError("No photo selected")
        photo.messages.append(message)
        if self.view is not None:
            self.view.show_messages(photo.messages)
        return MessageEvent(photo_id=photo.id, message=message)

    def next_photo(self) -> None:
        """Advance to the next photo, wrapping to the first."""
        if not self.photos:
            return
        index = -1 if self.current_index is None else self.current_index
        self.current_index = (index + 1) % len(self.photos)
        self._refresh()

    def previous_photo(self) -> None:
        """Step back to the previous photo, wrapping to the last."""
        if not self.photos:
            return
        index = -1 if self.current_index is None else self.current_index
        self.current_index = (index - 1) % len(self.photos)
        self._refresh()

    def _refresh(self) -> None:
        if self.view is None:
            return
        photo = self.current_photo
        self.view.show_photo(photo, self.current_index, len(self.photos))
        self.view.show_messages(photo.messages if photo else None)
