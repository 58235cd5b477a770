"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PreviewSettings(BaseSettings):
    """Preview window settings."""

    model_config = SettingsConfigDict(env_prefix="FRAMEMOTION_PREVIEW_", extra="ignore")

    # Window size; zero means "fit the frame"
    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)
    scale: float = Field(default=1.0, gt=0.0)

    # Colour behind the painted frame
    background: str = "#14141e"
    title: str = "framemotion preview"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FRAMEMOTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Playback
    fps: int = Field(default=60, ge=1, le=240)
    loop: bool = False
    speed: float = Field(default=1.0, ge=0.0)

    # Assets; relative image sources resolve against assets_path,
    # or the scene file directory when unset
    asset_workers: int = Field(default=2, ge=1)
    assets_path: Optional[Path] = None

    # Nested settings
    preview: PreviewSettings = Field(default_factory=PreviewSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
