"""Privileged board actions guarded by a shared secret."""

import hashlib
import hmac
import logging
from dataclasses import dataclass

from photoboard.services.hub import ReplicationHub

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a privileged action."""

    success: bool
    message: str


_INVALID_PASSWORD = ActionResult(success=False, message="Invalid password")


@dataclass
class AdminService:
    """Run wipe, close and open transitions for holders of the admin password."""

    hub: ReplicationHub
    admin_password: str

    def verify_password(self, password: str) -> bool:
        """Compare password digests in constant time."""
        return hmac.compare_digest(
            _hash_password(password), _hash_password(self.admin_password)
        )

    async def wipe(self, password: str) -> ActionResult:
        """Delete every photo and message."""
        if not self.verify_password(password):
            logger.warning("Rejected wipe with invalid password")
            return _INVALID_PASSWORD
        await self.hub.wipe()
        return ActionResult(success=True, message="All data wiped")

    async def close_site(self, password: str) -> ActionResult:
        """Lock every viewer out of the board."""
        if not self.verify_password(password):
            logger.warning("Rejected close-site with invalid password")
            return _INVALID_PASSWORD
        await self.hub.close_site()
        return ActionResult(success=True, message="Site closed")

    async def open_site(self, password: str) -> ActionResult:
        """Lift the lockout."""
        if not self.verify_password(password):
            logger.warning("Rejected open-site with invalid password")
            return _INVALID_PASSWORD
        await self.hub.open_site()
        return ActionResult(success=True, message="Site opened")


def _hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()
