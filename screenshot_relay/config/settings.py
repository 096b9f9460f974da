"""
Application settings loaded from the environment.

Values mirror the bindings the hosting environment provides: account id,
API token and the screenshots bucket, plus server and storage options.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RENDER_API_URL = (
    "https://api.cloudflare.com/client/v4/accounts/{account_id}/browser-rendering/screenshot"
)
R2_ENDPOINT_TEMPLATE = "https://{account_id}.r2.cloudflarestorage.com"


class Settings(BaseSettings):
    """Screenshot relay settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8787
    log_level: str = "INFO"

    # Rendering service
    account_id: str = ""
    api_token: str = ""
    render_api_url: str = DEFAULT_RENDER_API_URL
    render_timeout: float | None = Field(
        default=None, description="Seconds; None leaves the call unbounded"
    )

    # Object storage
    storage_backend: Literal["s3", "local"] = "s3"
    screenshots_bucket: str = "screenshots"
    s3_endpoint_url: str | None = None
    s3_access_key_id: str | None = None
    s3_secret_access_key: str | None = None
    s3_region: str = "auto"
    local_storage_path: Path = Path("./screenshots")

    def get_s3_endpoint_url(self) -> str | None:
        """Explicit endpoint, else the R2 endpoint for the account."""
        if self.s3_endpoint_url:
            return self.s3_endpoint_url
        if self.account_id:
            return R2_ENDPOINT_TEMPLATE.format(account_id=self.account_id)
        return None


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings, loading from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def init_settings(settings: Settings) -> Settings:
    """Install explicit settings (tests, embedding)."""
    global _settings
    _settings = settings
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
