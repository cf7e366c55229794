"""Storage module for campaign data.

Provides SQLite-based storage for:
- Character records
- Random table categories, items and roll history
"""

from campaign_manager.storage.database import (
    CategoryRecord,
    Database,
    RandomItemRecord,
    RollRecord,
    get_database,
)
from campaign_manager.storage.seed import seed_characters

__all__ = [
    "Database",
    "CategoryRecord",
    "RandomItemRecord",
    "RollRecord",
    "get_database",
    "seed_characters",
]
