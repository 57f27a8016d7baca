"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from photoboard.api.admin import router as admin_router
from photoboard.api.websocket import router as websocket_router
from photoboard.app_logging import configure_logging
from photoboard.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        snapshot = await state_container.persistence.load()
        state_container.state_store.restore(snapshot)
        logger.info(
            "Board ready",
            extra={
                "photos": len(snapshot.photos),
                "closed": snapshot.is_site_closed,
            },
        )
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)
    app.include_router(websocket_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
