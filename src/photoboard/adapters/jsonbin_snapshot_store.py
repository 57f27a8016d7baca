"""JSONBin-backed snapshot store."""

from dataclasses import dataclass

import httpx

from photoboard.services.persistence import SnapshotStore


@dataclass
class HttpxJsonBinSnapshotStore(SnapshotStore):
    """Keep the board blob in a single JSONBin bin."""

    api_key: str
    bin_id: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, api_key: str, bin_id: str, base_url: str
    ) -> "HttpxJsonBinSnapshotStore":
        """Create a JSONBin store with a managed httpx session."""
        return cls(
            api_key=api_key,
            bin_id=bin_id,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def load(self) -> dict[str, object] | None:
        """Fetch the latest version of the bin."""
        url = f"{self.base_url}/b/{self.bin_id}"
        response = await self.http_client.get(
            url, headers={"X-Master-Key": self.api_key}, timeout=15
        )
        response.raise_for_status()
        return response.json().get("record")

    async def save(self, payload: dict[str, object]) -> None:
        """Replace the bin contents."""
        url = f"{self.base_url}/b/{self.bin_id}"
        response = await self.http_client.put(
            url,
            headers={"X-Master-Key": self.api_key},
            json=payload,
            timeout=15,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
