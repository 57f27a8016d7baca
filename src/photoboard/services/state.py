"""Authoritative in-memory board state."""

from dataclasses import dataclass, field

from photoboard.domain.models import Message, Photo, SiteSnapshot


@dataclass
class SharedStateStore:
    """Server-side photos with their messages plus the site status flag.

    Photos are not deduplicated here; replicas suppress duplicates on their side.
    """

    photos: list[Photo] = field(default_factory=list)
    is_site_closed: bool = False

    def append_photo(self, photo: Photo) -> None:
        """Append a photo at the end of the collection."""
        self.photos.append(photo)

    def find_photo(self, photo_id: str) -> Photo | None:
        """Return the first photo with the given id."""
        for photo in self.photos:
            if photo.id == photo_id:
                return photo
        return None

    def append_message(self, photo_id: str, message: Message) -> bool:
        """Append a message to a photo; unknown photo ids are ignored."""
        photo = self.find_photo(photo_id)
        if photo is None:
            return False
        photo.messages.append(message)
        return True

    def wipe(self) -> None:
        """Drop every photo and reopen the site."""
        self.photos = []
        self.is_site_closed = False

    def set_status(self, is_open: bool) -> None:
        """Open or close the site."""
        self.is_site_closed = not is_open

    def snapshot(self) -> SiteSnapshot:
        """Return the full current state."""
        return SiteSnapshot(
            photos=list(self.photos), is_site_closed=self.is_site_closed
        )

    def restore(self, snapshot: SiteSnapshot) -> None:
        """Replace the whole state, e.g. with the durable copy at startup."""
        self.photos = list(snapshot.photos)
        self.is_site_closed = snapshot.is_site_closed
