"""ASGI entrypoint for the photo board server."""

from photoboard.api.app import create_app
from photoboard.containers import build_container

app = create_app(build_container())
