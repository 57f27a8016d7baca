"""Privileged action endpoints guarded by the shared admin password."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from pydantic import BaseModel

if TYPE_CHECKING:
    from photoboard.containers import AppContainer
    from photoboard.services.admin import ActionResult

router = APIRouter(prefix="/api", tags=["admin"])


class PasswordRequest(BaseModel):
    """Body of every privileged action request."""

    password: str = ""


class ActionResponse(BaseModel):
    """Outcome returned to the caller, also on a wrong password."""

    success: bool
    message: str


@router.post("/wipe")
async def wipe(body: PasswordRequest, request: Request) -> ActionResponse:
    """Delete every photo and message and reopen the site."""
    container: AppContainer = request.app.state.container
    return _to_response(await container.admin_service.wipe(body.password))


@router.post("/close-site")
async def close_site(body: PasswordRequest, request: Request) -> ActionResponse:
    """Lock every viewer out."""
    container: AppContainer = request.app.state.container
    return _to_response(await container.admin_service.close_site(body.password))


@router.post("/open-site")
async def open_site(body: PasswordRequest, request: Request) -> ActionResponse:
    """Reopen the site."""
    container: AppContainer = request.app.state.container
    return _to_response(await container.admin_service.open_site(body.password))


def _to_response(result: ActionResult) -> ActionResponse:
    return ActionResponse(success=result.success, message=result.message)
