"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from photoboard.config import Settings
from photoboard.containers import AppContainer
from photoboard.domain.events import MessageEvent, PhotoEvent
from photoboard.domain.models import Message, Photo
from photoboard.services.admin import ActionResult, AdminService
from photoboard.services.hub import Connection, ReplicationHub
from photoboard.services.persistence import (
    InMemorySnapshotStore,
    PersistenceGateway,
    SnapshotStore,
)
from photoboard.services.replica import ReplicaView
from photoboard.services.state import SharedStateStore
from photoboard.services.viewer import AdminClient, HubTransport

ADMIN_PASSWORD = "open-sesame"


def make_photo(photo_id: str = "p1", messages: list[Message] | None = None) -> Photo:
    return Photo(
        id=photo_id,
        src="data:image/jpeg;base64,ZmFrZQ==",
        upload_date="10/19/2026, 10:00:00 AM",
        messages=messages or [],
    )


@dataclass(eq=False)
class FakeConnection(Connection):
    """Fake hub connection that records outbound frames."""

    open: bool = True
    fail: bool = False
    sent: list[str] = field(default_factory=list)

    @property
    def is_open(self) -> bool:
        return self.open

    async def send_text(self, data: str) -> None:
        if self.fail:
            raise ConnectionResetError("socket gone")
        self.sent.append(data)

    @property
    def events(self) -> list[dict[str, object]]:
        return [json.loads(frame) for frame in self.sent]

    @property
    def types(self) -> list[str]:
        return [str(event["type"]) for event in self.events]


@dataclass
class FailingSnapshotStore(SnapshotStore):
    """Snapshot store whose every call fails."""

    attempts: int = 0

    async def load(self) -> dict[str, object] | None:
        self.attempts += 1
        raise ConnectionError("blob store unreachable")

    async def save(self, payload: dict[str, object]) -> None:
        self.attempts += 1
        raise ConnectionError("blob store unreachable")


@dataclass
class FakeHubTransport(HubTransport):
    """Fake hub link that records sent events."""

    events: list[PhotoEvent | MessageEvent] = field(default_factory=list)

    async def send_event(self, event: PhotoEvent | MessageEvent) -> None:
        self.events.append(event)


@dataclass
class FakeAdminClient(AdminClient):
    """Fake admin client accepting a single password."""

    password: str = ADMIN_PASSWORD
    calls: list[str] = field(default_factory=list)

    async def wipe(self, password: str) -> ActionResult:
        return self._result("wipe", password, "All data wiped")

    async def close_site(self, password: str) -> ActionResult:
        return self._result("close-site", password, "Site closed")

    async def open_site(self, password: str) -> ActionResult:
        return self._result("open-site", password, "Site opened")

    def _result(self, action: str, password: str, message: str) -> ActionResult:
        self.calls.append(action)
        if password != self.password:
            return ActionResult(success=False, message="Invalid password")
        return ActionResult(success=True, message=message)


@dataclass
class RecordingView(ReplicaView):
    """View that records what the replica asked it to render."""

    shown: list[tuple[str | None, int | None, int]] = field(default_factory=list)
    threads: list[list[str] | None] = field(default_factory=list)
    locked: list[bool] = field(default_factory=list)

    def show_photo(self, photo: Photo | None, index: int | None, total: int) -> None:
        self.shown.append((photo.id if photo else None, index, total))

    def show_messages(self, messages: list[Message] | None) -> None:
        self.threads.append(
            [message.text for message in messages] if messages is not None else None
        )

    def set_locked(self, locked: bool) -> None:
        self.locked.append(locked)


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_password=ADMIN_PASSWORD, persistence_backend="memory")


@pytest.fixture
def snapshot_store() -> InMemorySnapshotStore:
    return InMemorySnapshotStore()


@pytest.fixture
def state_store() -> SharedStateStore:
    return SharedStateStore()


@pytest.fixture
def persistence(snapshot_store: InMemorySnapshotStore) -> PersistenceGateway:
    return PersistenceGateway(snapshot_store)


@pytest.fixture
def hub(
    state_store: SharedStateStore, persistence: PersistenceGateway
) -> ReplicationHub:
    return ReplicationHub(store=state_store, persistence=persistence)


@pytest.fixture
def container(
    settings: Settings,
    state_store: SharedStateStore,
    persistence: PersistenceGateway,
    hub: ReplicationHub,
) -> AppContainer:
    admin_service = AdminService(hub=hub, admin_password=settings.admin_password)

    async def close_resources() -> None:
        hub.close()
        await persistence.drain()

    return AppContainer(
        settings=settings,
        state_store=state_store,
        persistence=persistence,
        hub=hub,
        admin_service=admin_service,
        close_resources=close_resources,
    )
