"""Pydantic V2 schemas for character records.

This module defines the character record shared by the character store,
the presentation layer, and the combat engine. The combat engine treats
characters as read-only and only consults ``Character.life``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from campaign_manager.core.constants import MAX_NAME_LENGTH
from campaign_manager.models.enums import CharacterCategory, QualityKind


NonNegativeInt = Annotated[int, Field(ge=0)]


class CharacterAttributes(BaseModel):
    """Core attribute block of a character.

    Attributes:
        strength: Raw physical power.
        intelligence: Reasoning and memory.
        dexterity: Agility and reflexes.
        perception: Awareness of surroundings.
        constitution: Endurance and health.
        will_power: Mental fortitude.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: NonNegativeInt = 0
    intelligence: NonNegativeInt = 0
    dexterity: NonNegativeInt = 0
    perception: NonNegativeInt = 0
    constitution: NonNegativeInt = 0
    will_power: NonNegativeInt = 0


class CharacterStatus(BaseModel):
    """Derived status block of a character.

    Attributes:
        life: Baseline hit points; the combat engine's maximum HP.
        endurance: Stamina pool.
        speed: Movement rate.
        max_load: Carrying capacity.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    life: NonNegativeInt = 0
    endurance: NonNegativeInt = 0
    speed: NonNegativeInt = 0
    max_load: NonNegativeInt = 0


class CharacterSkill(BaseModel):
    """A trained skill."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH, description="Skill name")
    level: NonNegativeInt = 0
    description: str = Field(default="", max_length=500, description="Skill description")


class CharacterTrait(BaseModel):
    """A quality or drawback."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH, description="Trait name")
    kind: QualityKind = Field(description="Quality or drawback")
    level: NonNegativeInt = 0
    description: str = Field(default="", max_length=500, description="Trait description")


class Character(BaseModel):
    """Character record.

    Attributes:
        id: Unique character identifier.
        name: Display name.
        category: Player, NPC, ally, monster or zombie.
        age: Optional age in years.
        weight: Optional weight.
        height: Optional height.
        attributes: Optional attribute block.
        status: Optional status block; its ``life`` seeds combat HP.
        skills: Trained skills.
        traits: Qualities and drawbacks.
        created_at: When the record was created.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID = Field(default_factory=uuid4, description="Unique character ID")
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH, description="Display name")
    category: CharacterCategory = Field(description="Character category")
    age: NonNegativeInt | None = None
    weight: NonNegativeInt | None = None
    height: NonNegativeInt | None = None
    attributes: CharacterAttributes | None = None
    status: CharacterStatus | None = None
    skills: list[CharacterSkill] = Field(default_factory=list)
    traits: list[CharacterTrait] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def life(self) -> int:
        """Baseline hit points, or 0 when no status block is recorded."""
        if self.status is None:
            return 0
        return self.status.life

    @property
    def qualities(self) -> list[CharacterTrait]:
        """Traits that are qualities."""
        return [t for t in self.traits if t.kind == QualityKind.QUALITY]

    @property
    def drawbacks(self) -> list[CharacterTrait]:
        """Traits that are drawbacks."""
        return [t for t in self.traits if t.kind == QualityKind.DRAWBACK]


__all__ = [
    "CharacterAttributes",
    "CharacterStatus",
    "CharacterSkill",
    "CharacterTrait",
    "Character",
]
