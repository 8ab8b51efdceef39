"""Configuration management for Parley."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_utils import configure_logging


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PARLEY_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Recognition
    default_locale: str = Field(default="en-us", description="Locale used when an activity carries none")
    max_token_distance: int = Field(default=2, description="Maximum tokens skipped between matched choice tokens")

    # Persistence
    state_dir: Optional[Path] = Field(None, description="Directory for JSON dialog state; in-memory when unset")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: Literal["default", "chat"] = Field(default="default", description="Log output profile")


def get_settings(state_dir: Optional[Path] = None) -> Settings:
    """Get application settings.

    Args:
        state_dir: Optional state directory override

    Returns:
        Settings instance
    """
    settings = Settings() if state_dir is None else Settings(state_dir=state_dir)

    configure_logging(profile=settings.log_profile, level=settings.log_level)

    return settings
