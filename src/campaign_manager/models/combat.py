"""Pydantic V2 schemas for combat sessions.

This module defines the combatant instance tracked by the combat engine
and the read-only snapshot records handed to the presentation layer.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from campaign_manager.models.character import Character
from campaign_manager.models.enums import CharacterCategory, CombatPhase


class CombatantInstance(BaseModel):
    """One appearance of a character in an encounter.

    The same character may appear several times; each appearance gets its
    own ``instance_id``.

    Attributes:
        instance_id: Unique per-encounter identifier.
        character: The character this instance represents (shared, read-only).
        initiative: Initiative value, or None while unset.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    instance_id: UUID = Field(default_factory=uuid4, description="Unique instance ID")
    character: Character = Field(description="Referenced character")
    initiative: Annotated[int, Field(ge=0)] | None = Field(
        default=None,
        description="Initiative value, None while unset",
    )

    @property
    def has_initiative(self) -> bool:
        """Check whether an initiative value has been assigned."""
        return self.initiative is not None

    @property
    def name(self) -> str:
        """Display name of the underlying character."""
        return self.character.name


class CombatantView(BaseModel):
    """Read-only view of a combatant for rendering.

    Attributes:
        instance_id: Unique per-encounter identifier.
        character_id: Id of the underlying character.
        name: Display name.
        category: Character category.
        initiative: Initiative value, or None while unset.
        current_hp: Current hit points.
        max_hp: Maximum hit points.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    instance_id: UUID
    character_id: UUID
    name: str
    category: CharacterCategory
    initiative: int | None
    current_hp: int
    max_hp: int

    @property
    def is_down(self) -> bool:
        """Whether the combatant is at 0 HP (cosmetic only)."""
        return self.current_hp <= 0


class CombatSnapshot(BaseModel):
    """Read-only snapshot of a combat session.

    Attributes:
        phase: Current session phase.
        roster: Combatants in insertion order.
        turn_order: Instance ids in turn order (empty until active).
        cursor: Index into ``turn_order`` (None unless active).
        round_number: Current round (0 until active).
        current_instance_id: Whose turn it is, if anyone's.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    phase: CombatPhase
    roster: list[CombatantView] = Field(default_factory=list)
    turn_order: list[UUID] = Field(default_factory=list)
    cursor: int | None = None
    round_number: int = 0
    current_instance_id: UUID | None = None

    def view(self, instance_id: UUID) -> CombatantView | None:
        """Look up a combatant view by instance id."""
        for combatant in self.roster:
            if combatant.instance_id == instance_id:
                return combatant
        return None

    @property
    def ordered_roster(self) -> list[CombatantView]:
        """Roster views in turn order, or insertion order before combat."""
        if not self.turn_order:
            return list(self.roster)
        by_id = {c.instance_id: c for c in self.roster}
        return [by_id[i] for i in self.turn_order if i in by_id]


__all__ = [
    "CombatantInstance",
    "CombatantView",
    "CombatSnapshot",
]
