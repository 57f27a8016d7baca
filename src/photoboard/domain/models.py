"""Domain models for the shared photo board."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Message(BaseModel):
    """Text message attached to a photo.

    Messages carry no id; within one photo the ``(date, text)`` pair is the
    identity used for deduplication.
    """

    date: str
    text: str

    def same_as(self, other: "Message") -> bool:
        """Return true when both messages share the dedup identity."""
        return self.date == other.date and self.text == other.text


class Photo(BaseModel):
    """Photo with its ordered, append-only message thread."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    src: str
    upload_date: str = Field(alias="uploadDate")
    messages: list[Message] = Field(default_factory=list)

    def has_message(self, message: Message) -> bool:
        """Return true when an identical message is already in the thread."""
        return any(existing.same_as(message) for existing in self.messages)


class SiteSnapshot(BaseModel):
    """Full board state, used for join snapshots and the persistence blob."""

    model_config = ConfigDict(populate_by_name=True)

    photos: list[Photo] = Field(default_factory=list)
    is_site_closed: bool = Field(default=False, alias="isSiteClosed")

    @field_validator("photos", mode="before")
    @classmethod
    def _photos_or_empty(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("is_site_closed", mode="before")
    @classmethod
    def _closed_or_open(cls, value: object) -> object:
        return False if value is None else value

    def to_payload(self) -> dict[str, object]:
        """Serialize to the JSON blob shape."""
        return self.model_dump(mode="json", by_alias=True)
