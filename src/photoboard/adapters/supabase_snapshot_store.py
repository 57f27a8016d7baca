"""Supabase-backed snapshot store."""

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from photoboard.services.persistence import SnapshotStore


@dataclass
class SupabaseSnapshotStore(SnapshotStore):
    """Keep the board blob in one row of a Supabase table."""

    client: Client
    table: str = "site_snapshots"
    snapshot_id: str = "default"

    async def load(self) -> dict[str, object] | None:
        """Return the stored payload column, if the row exists."""
        return await asyncio.to_thread(self._load)

    async def save(self, payload: dict[str, object]) -> None:
        """Upsert the snapshot row."""
        await asyncio.to_thread(self._save, payload)

    def _load(self) -> dict[str, object] | None:
        response = (
            self.client.table(self.table)
            .select("payload")
            .eq("id", self.snapshot_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("payload")

    def _save(self, payload: dict[str, object]) -> None:
        self.client.table(self.table).upsert(
            {
                "id": self.snapshot_id,
                "payload": payload,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
