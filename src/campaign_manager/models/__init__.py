"""Pydantic V2 schemas for the RPG Campaign Manager.

Submodules:
    enums: Enumeration types (CharacterCategory, QualityKind, CombatPhase)
    character: Character records (attributes, status, skills, traits)
    combat: Combatant instances and session snapshots
    resources: Rules catalog of skills and qualities/drawbacks

Example:
    >>> from campaign_manager.models import Character, CharacterCategory, CharacterStatus
    >>> goblin = Character(
    ...     name="Goblin",
    ...     category=CharacterCategory.MONSTER,
    ...     status=CharacterStatus(life=7),
    ... )
    >>> goblin.life
    7
"""

from __future__ import annotations

from campaign_manager.models.character import (
    Character,
    CharacterAttributes,
    CharacterSkill,
    CharacterStatus,
    CharacterTrait,
)
from campaign_manager.models.combat import (
    CombatantInstance,
    CombatantView,
    CombatSnapshot,
)
from campaign_manager.models.enums import (
    CharacterCategory,
    CombatPhase,
    QualityKind,
    SkillType,
)
from campaign_manager.models.resources import ResourceQualityDrawback, ResourceSkill


__all__ = [
    # Enumerations
    "CharacterCategory",
    "CombatPhase",
    "QualityKind",
    "SkillType",
    # Characters
    "Character",
    "CharacterAttributes",
    "CharacterSkill",
    "CharacterStatus",
    "CharacterTrait",
    # Combat
    "CombatantInstance",
    "CombatantView",
    "CombatSnapshot",
    # Resource catalog
    "ResourceSkill",
    "ResourceQualityDrawback",
]
