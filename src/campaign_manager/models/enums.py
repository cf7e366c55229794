"""Enumeration types for the RPG Campaign Manager."""

from __future__ import annotations

from enum import StrEnum


class CharacterCategory(StrEnum):
    """Role a character plays in the campaign.

    Values match the stored representation, so records written by other
    tools keep loading.
    """

    PLAYER = "PLAYER"
    NPC = "NPC"
    ALLY = "ALLY"
    MONSTER = "MONSTER"
    ZOMBIE = "ZOMBIE"

    @property
    def is_hostile(self) -> bool:
        """Check whether the category is normally fought against.

        Returns:
            True for monsters and zombies.
        """
        return self in (CharacterCategory.MONSTER, CharacterCategory.ZOMBIE)


class QualityKind(StrEnum):
    """Whether a character trait helps or hinders."""

    QUALITY = "QUALITY"
    DRAWBACK = "DRAWBACK"


class SkillType(StrEnum):
    """Kind of catalog skill."""

    REGULAR = "REGULAR"
    SPECIAL = "SPECIAL"


class CombatPhase(StrEnum):
    """Combat session phases."""

    SETUP = "setup"
    INITIATIVE = "initiative"
    ACTIVE = "active"


__all__ = [
    "CharacterCategory",
    "QualityKind",
    "SkillType",
    "CombatPhase",
]
