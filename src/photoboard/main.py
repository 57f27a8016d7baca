"""Command-line entrypoint that serves the board with uvicorn."""

import uvicorn

from photoboard.api.app import create_app
from photoboard.config import Settings
from photoboard.containers import build_container


def main() -> None:
    """Run the HTTP and websocket server on the configured address."""
    settings = Settings()
    app = create_app(build_container(settings))
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
