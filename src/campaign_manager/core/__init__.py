"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        CampaignManagerError: Base exception for all application errors.
        CombatError and its subclasses: Rejected combat session operations.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from campaign_manager.core.config import (
    RandomizerSettings,
    Settings,
    StorageSettings,
    UISettings,
    clear_settings_cache,
    get_settings,
)
from campaign_manager.core.exceptions import (
    CampaignManagerError,
    CombatError,
    CombatPhaseError,
    ComponentRenderError,
    ConfigurationError,
    CSVImportError,
    DiceRollError,
    EmptyCategoryError,
    GameEngineError,
    IncompleteInitiativeError,
    InsufficientCombatantsError,
    InvalidInitiativeError,
    RandomTableError,
    StorageError,
    UIError,
    UnknownInstanceError,
    ValidationError,
)
from campaign_manager.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "CampaignManagerError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    "StorageError",
    # Game engine exceptions
    "GameEngineError",
    "CombatError",
    "InvalidInitiativeError",
    "UnknownInstanceError",
    "IncompleteInitiativeError",
    "InsufficientCombatantsError",
    "CombatPhaseError",
    "DiceRollError",
    "RandomTableError",
    "EmptyCategoryError",
    "CSVImportError",
    # UI exceptions
    "UIError",
    "ComponentRenderError",
    # Configuration
    "Settings",
    "StorageSettings",
    "RandomizerSettings",
    "UISettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
