"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

PERSISTENCE_BACKENDS = frozenset({"jsonbin", "supabase", "memory"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_password: str
    persistence_backend: str = "jsonbin"
    jsonbin_api_url: str = "https://api.jsonbin.io/v3"
    jsonbin_api_key: str | None = None
    jsonbin_bin_id: str | None = None
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_snapshot_table: str = "site_snapshots"
    supabase_snapshot_id: str = "default"
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_backend(raw: str) -> str:
    """Normalize the configured persistence backend name."""
    backend = raw.strip().lower()
    if backend not in PERSISTENCE_BACKENDS:
        raise ValueError(f"Unknown persistence backend: {raw!r}")
    return backend
