"""Settings and configuration management."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CAPABILITIES_FILE = (
    Path(__file__).parent.parent / "capabilities" / "data" / "capabilities.json"
)

_LOG_FORMATS = ("text", "json")


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Capability dataset
    capabilities_file: Optional[Path] = Field(
        None,
        description="Path to a capability dataset (JSON or YAML). Defaults to the packaged table.",
    )

    # Live environment probe
    platform_user_agent: str = Field(
        "", description="User-Agent of the runtime probed when no identity is given"
    )
    in_iframe: bool = Field(
        False, description="Whether the probed runtime is embedded in an iframe"
    )

    # Logging
    log_level: str = Field("INFO", description="Logging level")
    log_format: str = Field("text", description="Log format: 'text' or 'json'")

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in _LOG_FORMATS:
            raise ValueError(f"log_format must be one of {_LOG_FORMATS}, got '{value}'")
        return value

    @property
    def dataset_path(self) -> Path:
        """Dataset file to load, falling back to the packaged table."""
        return self.capabilities_file or DEFAULT_CAPABILITIES_FILE


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
