"""Application settings powered by Pydantic BaseSettings."""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.features.transport.config import TransportConfig


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CONFIGSTORE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(default="http://localhost:8000")
    timeout_seconds: float = Field(default=10.0, ge=0.1, le=300.0)
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)

    def transport_config(self) -> TransportConfig:
        """Build the transport configuration for the authority."""
        return TransportConfig(
            base_url=self.base_url,
            timeout_seconds=self.timeout_seconds,
        )

    def logging_level(self) -> int:
        """Return the numeric logging level, INFO if unrecognized."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
