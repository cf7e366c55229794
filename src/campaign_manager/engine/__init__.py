"""Game engine module for the RPG Campaign Manager.

Submodules:
    roster: Combatant instances of an encounter
    turn_manager: Initiative sequencing and the turn cursor
    vitality: Per-instance hit point tracking
    combat_session: The combat session state machine
    dice: Dice rolling (d20 library)
    randomizer: Random tables with CSV import and roll history

Example:
    >>> from campaign_manager.engine import CombatSession
    >>> session = CombatSession()
    >>> session.phase
    <CombatPhase.SETUP: 'setup'>
"""

from __future__ import annotations

# =============================================================================
# Combat
# =============================================================================
from campaign_manager.engine.combat_session import CombatSession
from campaign_manager.engine.roster import Roster
from campaign_manager.engine.turn_manager import InitiativeSequencer, TurnCursor
from campaign_manager.engine.vitality import VitalityTracker

# =============================================================================
# Dice Rolling
# =============================================================================
from campaign_manager.engine.dice import DiceResult, DiceRoller, RollType, roll

# =============================================================================
# Random Tables
# =============================================================================
from campaign_manager.engine.randomizer import (
    ImportCategory,
    ImportResult,
    RandomTableService,
    decode_csv_upload,
    parse_category_csv,
)


__all__ = [
    # Combat
    "CombatSession",
    "Roster",
    "InitiativeSequencer",
    "TurnCursor",
    "VitalityTracker",
    # Dice Rolling
    "DiceResult",
    "DiceRoller",
    "RollType",
    "roll",
    # Random Tables
    "ImportCategory",
    "ImportResult",
    "RandomTableService",
    "decode_csv_upload",
    "parse_category_csv",
]
