"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    backend_url: str
    request_timeout_seconds: float = 10.0
    storage_path: str = ".locals/storage.json"
    upload_role: str = "Merchant"
    upload_permanent: bool = True
    max_upload_items: int = 5
    upload_concurrency: int = 1
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def is_tunnel_url(url: str | None) -> bool:
    """Return True when the base URL points at an ngrok development tunnel."""
    if not url:
        return False
    return "ngrok" in url.lower()
