"""HTTP client for privileged board actions."""

from dataclasses import dataclass

import httpx

from photoboard.services.admin import ActionResult
from photoboard.services.viewer import AdminClient


@dataclass
class HttpxAdminClient(AdminClient):
    """Admin client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxAdminClient":
        """Create an admin client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def wipe(self, password: str) -> ActionResult:
        """Call the wipe endpoint."""
        return await self._post("/api/wipe", password)

    async def close_site(self, password: str) -> ActionResult:
        """Call the close-site endpoint."""
        return await self._post("/api/close-site", password)

    async def open_site(self, password: str) -> ActionResult:
        """Call the open-site endpoint."""
        return await self._post("/api/open-site", password)

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _post(self, path: str, password: str) -> ActionResult:
        response = await self.http_client.post(
            f"{self.base_url}{path}", json={"password": password}, timeout=10
        )
        response.raise_for_status()
        data = response.json()
        return ActionResult(
            success=bool(data.get("success")), message=str(data.get("message", ""))
        )
