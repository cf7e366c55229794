"""Configuration management for the RPG Campaign Manager.

This module provides centralized configuration management using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.

Example:
    >>> from campaign_manager.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.app_name)
    'RPG Campaign Manager'

Environment Variables:
    CAMPAIGN_MANAGER_DATABASE_PATH: Path to the SQLite database file
    CAMPAIGN_MANAGER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    CAMPAIGN_MANAGER_JSON_LOGS: Emit JSON log lines
    CAMPAIGN_MANAGER_RANDOMIZER_MAX_ITEMS_PER_CATEGORY: Item cap for CSV imports
    CAMPAIGN_MANAGER_RANDOMIZER_HISTORY_LIMIT: Default roll history page size
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from campaign_manager.core.constants import (
    DEFAULT_HISTORY_LIMIT,
    MAX_ITEMS_PER_CATEGORY,
)
from campaign_manager.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for persistent storage.

    Attributes:
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CAMPAIGN_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/campaign_manager.db"),
        description="Path to SQLite database",
    )

    @field_validator("database_path", mode="after")
    @classmethod
    def ensure_parent_exists(cls, value: Path) -> Path:
        """Ensure the database directory exists, creating it if necessary.

        Args:
            value: The database path.

        Returns:
            The validated path.
        """
        value.parent.mkdir(parents=True, exist_ok=True)
        return value


class RandomizerSettings(BaseSettings):
    """Configuration for random tables.

    Attributes:
        max_items_per_category: Largest category accepted by CSV import.
        history_limit: Default number of roll history entries returned.
        seed: Optional seed for reproducible rolls.
    """

    model_config = SettingsConfigDict(
        env_prefix="CAMPAIGN_MANAGER_RANDOMIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_items_per_category: int = Field(
        default=MAX_ITEMS_PER_CATEGORY,
        ge=1,
        le=1000,
        description="Maximum items per imported category",
    )
    history_limit: int = Field(
        default=DEFAULT_HISTORY_LIMIT,
        ge=1,
        le=1000,
        description="Default roll history page size",
    )
    seed: int | None = Field(
        default=None,
        description="Random seed for reproducible rolls",
    )


class UISettings(BaseSettings):
    """Configuration for the Streamlit UI.

    Attributes:
        page_title: Browser page title.
        layout: Streamlit page layout.
    """

    model_config = SettingsConfigDict(
        env_prefix="CAMPAIGN_MANAGER_UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    page_title: str = Field(
        default="RPG Campaign Manager",
        description="Browser page title",
    )
    layout: Literal["wide", "centered"] = Field(
        default="wide",
        description="Streamlit page layout",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON instead of console output.
        storage: Storage settings.
        randomizer: Random table settings.
        ui: UI settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="CAMPAIGN_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="RPG Campaign Manager",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    randomizer: RandomizerSettings = Field(default_factory=RandomizerSettings)
    ui: UISettings = Field(default_factory=UISettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "RandomizerSettings",
    "UISettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
