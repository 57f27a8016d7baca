"""Client-side actions: upload, send, navigate and moderate."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from photoboard.domain.events import MessageEvent, PhotoEvent
from photoboard.domain.models import Message, Photo
from photoboard.services.admin import ActionResult
from photoboard.services.images import compress_image
from photoboard.services.replica import ClientReplica


DISPLAY_FORMAT = "%m/%d/%Y, %I:%M:%S %p"


class NoPhotoSelectedError(ValueError):
    """Raised when sending a message while no photo is displayed."""


class HubTransport(Protocol):
    """Outbound link from a viewer to the replication hub."""

    async def send_event(self, event: PhotoEvent | MessageEvent) -> None:
        """Send a locally originated event."""


class AdminClient(Protocol):
    """HTTP interface for privileged actions."""

    async def wipe(self, password: str) -> ActionResult:
        """Request a global wipe."""

    async def close_site(self, password: str) -> ActionResult:
        """Request the site to be closed."""

    async def open_site(self, password: str) -> ActionResult:
        """Request the site to be reopened."""


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class ViewerService:
    """Apply user actions to the local replica, then propagate them."""

    replica: ClientReplica
    transport: HubTransport
    admin_client: AdminClient
    clock: Callable[[], datetime] = _local_now
    _last_photo_millis: int = field(default=0, init=False, repr=False)

    async def upload_photo(self, image_bytes: bytes) -> Photo:
        """Downscale an image, show it locally and announce it to the hub."""
        now = self.clock()
        photo = Photo(
            id=self._next_photo_id(now),
            src=compress_image(image_bytes),
            upload_date=now.strftime(DISPLAY_FORMAT),
        )
        self.replica.add_local_photo(photo)
        await self.transport.send_event(PhotoEvent(photo=photo))
        return photo

    async def send_message(self, text: str) -> Message | None:
        """Post a message on the current photo; blank text is ignored."""
        cleaned = text.strip()
        if not cleaned:
            return None
        if self.replica.current_photo is None:
            raise NoPhotoSelectedError("Upload or select a photo first")
        message = Message(date=self.clock().strftime(DISPLAY_FORMAT), text=cleaned)
        event = self.replica.add_local_message(message)
        await self.transport.send_event(event)
        return message

    async def wipe(self, password: str) -> ActionResult:
        result = await self.admin_client.wipe(password)
        if result.success:
            self.replica.apply_wipe()
            self.replica.apply_status(closed=False)
        return result

    async def close_site(self, password: str) -> ActionResult:
        result = await self.admin_client.close_site(password)
        if result.success:
            self.replica.apply_status(closed=True)
        return result

    async def open_site(self, password: str) -> ActionResult:
        result = await self.admin_client.open_site(password)
        if result.success:
            self.replica.apply_status(closed=False)
        return result

    def _next_photo_id(self, now: datetime) -> str:
        millis = max(int(now.timestamp() * 1000), self._last_photo_millis + 1)
        self._last_photo_millis = millis
        return f"photo_{millis}"
