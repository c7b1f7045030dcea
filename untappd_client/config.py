"""Configuration handling for the Untappd command line client."""

from functools import lru_cache
from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

URI_BASE = "https://api.untappd.com/v3"
DEFAULT_TIMEOUT_SECONDS = 30.0

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    untappd_api_key: str | None = None
    untappd_username: str | None = None
    untappd_password: str | None = None
    untappd_base_url: str = URI_BASE
    http_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    verify_tls: bool = True
    log_level: LogLevel = "WARNING"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
