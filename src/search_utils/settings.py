"""Application settings with Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    app_mode: Literal["development", "production"] = Field(
        default="development",
        alias="APP_MODE",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "silent"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
    )

    # Twitter API
    twitter_bearer_token: SecretStr | None = Field(default=None, alias="TWITTER_BEARER_TOKEN")
    twitter_api_base_url: str = Field(default="https://api.twitter.com", alias="TWITTER_API_BASE_URL")
    twitter_timeout: float = Field(default=30.0, alias="TWITTER_TIMEOUT")

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_mode == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
