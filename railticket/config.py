"""Configuration management using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# Find .env file
# =============================================================================

def find_env_file() -> str:
    """Find the .env file relative to project root."""
    candidates = [
        "config/.env",
        ".env",
        Path(__file__).parent.parent / "config" / ".env",
    ]

    for candidate in candidates:
        path = Path(candidate)
        if path.exists():
            return str(path)

    return "config/.env"  # Default


ENV_FILE = find_env_file()


# =============================================================================
# Settings Classes
# =============================================================================


class ScheduleApiSettings(BaseSettings):
    """External train schedule API settings."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix="SCHEDULE_API_",
        extra="ignore",
    )

    base_url: str = "https://indian-railway-api.cyclic.app"
    timeout_seconds: float = 5.0
    enabled: bool = True

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Schedule API timeout must be positive")
        return v


class AppSettings(BaseSettings):
    """Application-level settings."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"


class Settings(BaseSettings):
    """Main settings container with lazy loading."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Cache for sub-settings
    _schedule_api: ScheduleApiSettings | None = None
    _app: AppSettings | None = None

    @property
    def schedule_api(self) -> ScheduleApiSettings:
        if self._schedule_api is None:
            self._schedule_api = ScheduleApiSettings()
        return self._schedule_api

    @property
    def app(self) -> AppSettings:
        if self._app is None:
            self._app = AppSettings()
        return self._app

    # Convenience accessors
    @property
    def schedule_api_base_url(self) -> str:
        return self.schedule_api.base_url

    @property
    def schedule_api_timeout(self) -> float:
        return self.schedule_api.timeout_seconds

    @property
    def schedule_api_enabled(self) -> bool:
        return self.schedule_api.enabled

    @property
    def log_level(self) -> str:
        return self.app.log_level

    @property
    def log_format(self) -> str:
        return self.app.log_format


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
