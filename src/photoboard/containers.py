"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from photoboard.adapters.jsonbin_snapshot_store import HttpxJsonBinSnapshotStore
from photoboard.adapters.supabase_snapshot_store import SupabaseSnapshotStore
from photoboard.config import Settings, resolve_backend
from photoboard.services.admin import AdminService
from photoboard.services.hub import ReplicationHub
from photoboard.services.persistence import (
    InMemorySnapshotStore,
    PersistenceGateway,
    SnapshotStore,
)
from photoboard.services.state import SharedStateStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    state_store: SharedStateStore
    persistence: PersistenceGateway
    hub: ReplicationHub
    admin_service: AdminService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    snapshot_store, close_store = _build_snapshot_store(resolved_settings)
    state_store = SharedStateStore()
    persistence = PersistenceGateway(snapshot_store)
    hub = ReplicationHub(store=state_store, persistence=persistence)
    admin_service = AdminService(
        hub=hub, admin_password=resolved_settings.admin_password
    )

    async def close_resources() -> None:
        hub.close()
        await persistence.drain()
        await close_store()

    return AppContainer(
        settings=resolved_settings,
        state_store=state_store,
        persistence=persistence,
        hub=hub,
        admin_service=admin_service,
        close_resources=close_resources,
    )


def _build_snapshot_store(
    settings: Settings,
) -> tuple[SnapshotStore, Callable[[], Awaitable[None]]]:
    backend = resolve_backend(settings.persistence_backend)
    if backend == "jsonbin":
        if not settings.jsonbin_api_key or not settings.jsonbin_bin_id:
            raise ValueError(
                "JSONBin persistence needs JSONBIN_API_KEY and JSONBIN_BIN_ID"
            )
        store = HttpxJsonBinSnapshotStore.create(
            api_key=settings.jsonbin_api_key,
            bin_id=settings.jsonbin_bin_id,
            base_url=settings.jsonbin_api_url,
        )
        return store, store.close
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "Supabase persistence needs SUPABASE_URL and SUPABASE_SERVICE_KEY"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return (
            SupabaseSnapshotStore(
                client=client,
                table=settings.supabase_snapshot_table,
                snapshot_id=settings.supabase_snapshot_id,
            ),
            _noop_close,
        )
    return InMemorySnapshotStore(), _noop_close


async def _noop_close() -> None:
    return None
