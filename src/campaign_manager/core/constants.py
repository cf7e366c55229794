"""Application-wide constants for the RPG Campaign Manager."""

from __future__ import annotations

# =============================================================================
# Combat Constants
# =============================================================================

MIN_COMBATANTS = 2
"""Smallest roster that may leave setup."""

MIN_INITIATIVE = 0
"""Lowest initiative value accepted by the sequencer."""

MAX_INITIATIVE_INPUT = 99
"""Upper bound offered by initiative input widgets (not enforced by the engine)."""

# =============================================================================
# Random Tables
# =============================================================================

MAX_ITEMS_PER_CATEGORY = 20
"""Largest category accepted by CSV import."""

DEFAULT_HISTORY_LIMIT = 50
"""Default number of roll history entries returned."""

# =============================================================================
# Characters
# =============================================================================

MAX_NAME_LENGTH = 100
"""Maximum length of character, category and item names."""


__all__ = [
    "MIN_COMBATANTS",
    "MIN_INITIATIVE",
    "MAX_INITIATIVE_INPUT",
    "MAX_ITEMS_PER_CATEGORY",
    "DEFAULT_HISTORY_LIMIT",
    "MAX_NAME_LENGTH",
]
