"""Best-effort persistence of the board to an external snapshot blob."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from photoboard.domain.models import SiteSnapshot

logger = logging.getLogger(__name__)


class SnapshotStore(Protocol):
    """Storage interface for the persisted board blob."""

    async def load(self) -> dict[str, object] | None:
        """Return the stored blob, or None when nothing was stored yet."""

    async def save(self, payload: dict[str, object]) -> None:
        """Overwrite the stored blob."""


@dataclass
class InMemorySnapshotStore(SnapshotStore):
    """Process-local snapshot store for development setups."""

    payload: dict[str, object] | None = None
    saves: int = 0

    async def load(self) -> dict[str, object] | None:
        """Return the last saved blob."""
        return self.payload

    async def save(self, payload: dict[str, object]) -> None:
        """Keep the blob in memory."""
        self.payload = payload
        self.saves += 1


@dataclass
class PersistenceGateway:
    """Mirror the board to a snapshot store without blocking mutations.

    Saves run as detached tasks. A failed save is logged and counted but never
    retried or rolled back; the next successful save rewrites the full state.
    """

    store: SnapshotStore
    failures: int = 0
    last_error: str | None = None
    _pending: set[asyncio.Task[None]] = field(
        default_factory=set, init=False, repr=False
    )

    async def load(self) -> SiteSnapshot:
        """Return the durable snapshot, or an empty board on any failure."""
        try:
            payload = await self.store.load()
        except Exception:
            logger.exception("Failed to load board snapshot; starting empty")
            return SiteSnapshot()
        if not payload:
            logger.info("No stored board snapshot; starting empty")
            return SiteSnapshot()
        try:
            snapshot = SiteSnapshot.model_validate(payload)
        except ValidationError:
            logger.exception("Stored board snapshot is malformed; starting empty")
            return SiteSnapshot()
        logger.info(
            "Loaded board snapshot",
            extra={"photos": len(snapshot.photos)},
        )
        return snapshot

    def save(self, snapshot: SiteSnapshot) -> None:
        """Schedule a write of the snapshot and return immediately."""
        payload = snapshot.to_payload()
        task = asyncio.get_running_loop().create_task(self._write(payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every in-flight save to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    @property
    def pending(self) -> int:
        """Number of saves still in flight."""
        return len(self._pending)

    async def _write(self, payload: dict[str, object]) -> None:
        try:
            await self.store.save(payload)
        except Exception as exc:
            self.failures += 1
            self.last_error = f"{type(exc).__name__}: {exc}"
            logger.exception(
                "Failed to save board snapshot",
                extra={"failures": self.failures},
            )
            return
        logger.info("Board snapshot saved")
