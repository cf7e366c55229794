"""RPG Campaign Manager - tabletop campaign data and combat tracking.

Example:
    >>> from campaign_manager import CombatSession, Database
    >>>
    >>> db = Database("campaign.db")
    >>> session = CombatSession()
    >>> for character in db.get_all_characters()[:2]:
    ...     session.add_combatant(character)
    >>> session.proceed_to_initiative()

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for characters and combat.
    engine: Combat session, dice, and random tables.
    storage: SQLite persistence for characters and random tables.
    ui: Streamlit interface.
"""

from __future__ import annotations

# Core
from campaign_manager.core.config import Settings, get_settings
from campaign_manager.core.exceptions import CampaignManagerError, CombatError
from campaign_manager.core.logging import configure_logging, get_logger

# Models
from campaign_manager.models import (
    Character,
    CharacterAttributes,
    CharacterCategory,
    CharacterStatus,
    CombatantInstance,
    CombatPhase,
    CombatSnapshot,
)

# Engine
from campaign_manager.engine import CombatSession, DiceRoller, RandomTableService

# Storage
from campaign_manager.storage import Database, get_database


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "CampaignManagerError",
    "CombatError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Character",
    "CharacterAttributes",
    "CharacterCategory",
    "CharacterStatus",
    "CombatantInstance",
    "CombatPhase",
    "CombatSnapshot",
    # Engine
    "CombatSession",
    "DiceRoller",
    "RandomTableService",
    # Storage
    "Database",
    "get_database",
]
