"""
Configuration management using pydantic-settings.

Loads settings from environment variables and .env file.
Provides type-safe access with validation.
"""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ─────────────────────────────────────────────────────────────
# NESTED SETTINGS
# ─────────────────────────────────────────────────────────────


class GameSettings(BaseSettings):
    """Board geometry and seating."""

    model_config = SettingsConfigDict(env_prefix="GAME_")

    rows: int = Field(default=6, ge=1, le=20)
    cols: int = Field(default=7, ge=1, le=20)
    win_length: int = Field(default=4, ge=2, description="Pieces in a row to win")
    human_first: bool = True

    @model_validator(mode="after")
    def _check_win_length(self) -> "GameSettings":
        if self.win_length > max(self.rows, self.cols):
            raise ValueError(
                f"win_length {self.win_length} does not fit a {self.rows}x{self.cols} board"
            )
        return self


class AISettings(BaseSettings):
    """Computer player configuration."""

    model_config = SettingsConfigDict(env_prefix="AI_")

    depth: int = Field(default=4, ge=1, le=8, description="Minimax search depth")


class LogSettings(BaseSettings):
    """Logging configuration (applied by the CLI only)."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ─────────────────────────────────────────────────────────────
# MAIN SETTINGS
# ─────────────────────────────────────────────────────────────


class Settings(BaseSettings):
    """
    Main application settings.

    Loads from .env file and environment variables.
    Environment variables take precedence over .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    game: GameSettings = Field(default_factory=GameSettings)
    ai: AISettings = Field(default_factory=AISettings)
    log: LogSettings = Field(default_factory=LogSettings)


# ─────────────────────────────────────────────────────────────
# SINGLETON ACCESS
# ─────────────────────────────────────────────────────────────

_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (for testing)."""
    global _settings
    _settings = None
