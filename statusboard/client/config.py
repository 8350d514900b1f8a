"""Client configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for talking to a status board server."""

    model_config = SettingsConfigDict(
        env_prefix="STATUSBOARD_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_url: str = Field(default="http://localhost:8000")
    token_file: Path = Field(default=Path.home() / ".statusboard" / "token")
    timeout: float = Field(default=10.0)


@lru_cache
def get_client_settings() -> ClientSettings:
    """Get cached client settings instance."""
    return ClientSettings()
