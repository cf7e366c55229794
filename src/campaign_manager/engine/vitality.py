"""Per-instance hit point bookkeeping for combat encounters.

HP is tracked per combatant instance, independently of the character's
stored baseline and of whose turn it is. Each instance's HP starts at
its character's ``life`` the first time it is looked at and is clamped
to ``0..life`` on every change.

Known quirk: when a character has no recorded life (max HP 0), healing
is not clamped from above and HP may grow without bound.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from campaign_manager.core.exceptions import ValidationError
from campaign_manager.core.logging import get_logger


if TYPE_CHECKING:
    from uuid import UUID

    from campaign_manager.engine.roster import Roster

logger = get_logger(__name__)


def _check_amount(amount: int, field_name: str) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        logger.warning("HP change rejected", amount=repr(amount))
        raise ValidationError(
            f"{field_name} must be an integer",
            field_name=field_name,
            invalid_value=amount,
        )


class VitalityTracker:
    """Track current HP for the instances of a roster."""

    def __init__(self, roster: Roster) -> None:
        """Initialize the tracker.

        Args:
            roster: The roster whose instances are tracked.
        """
        self._roster = roster
        self._hp: dict[UUID, int] = {}

    def max_hp(self, instance_id: UUID) -> int:
        """Get the maximum HP of an instance.

        Raises:
            UnknownInstanceError: If the id is not in the roster.
        """
        return self._roster.get(instance_id).character.life

    def current_hp(self, instance_id: UUID) -> int:
        """Get the current HP of an instance, initializing it on first use.

        Raises:
            UnknownInstanceError: If the id is not in the roster.
        """
        instance = self._roster.get(instance_id)
        if instance_id not in self._hp:
            self._hp[instance_id] = instance.character.life
        return self._hp[instance_id]

    def apply_damage(self, instance_id: UUID, amount: int) -> int:
        """Subtract damage, never going below 0.

        Args:
            instance_id: Id of the combatant instance.
            amount: Damage to apply; zero or negative amounts are ignored.

        Returns:
            The instance's HP after the operation.

        Raises:
            UnknownInstanceError: If the id is not in the roster.
            ValidationError: If the amount is not an integer.
        """
        _check_amount(amount, "amount")
        hp = self.current_hp(instance_id)
        if amount <= 0:
            return hp

        new_hp = max(0, hp - amount)
        self._hp[instance_id] = new_hp
        logger.info(
            "Damage applied",
            instance_id=str(instance_id),
            amount=amount,
            hp_before=hp,
            hp=new_hp,
        )
        return new_hp

    def apply_heal(self, instance_id: UUID, amount: int) -> int:
        """Add healing, never going above max HP when max HP is known.

        Args:
            instance_id: Id of the combatant instance.
            amount: Healing to apply; zero or negative amounts are ignored.

        Returns:
            The instance's HP after the operation.

        Raises:
            UnknownInstanceError: If the id is not in the roster.
            ValidationError: If the amount is not an integer.
        """
        _check_amount(amount, "amount")
        hp = self.current_hp(instance_id)
        if amount <= 0:
            return hp

        max_hp = self.max_hp(instance_id)
        if max_hp > 0:
            new_hp = min(max_hp, hp + amount)
        else:
            new_hp = hp + amount
            logger.warning(
                "Heal applied without upper bound, character has no life value",
                instance_id=str(instance_id),
            )

        self._hp[instance_id] = new_hp
        logger.info(
            "Heal applied",
            instance_id=str(instance_id),
            amount=amount,
            hp_before=hp,
            hp=new_hp,
        )
        return new_hp

    def forget(self, instance_id: UUID) -> None:
        """Drop any stored HP for an instance."""
        self._hp.pop(instance_id, None)

    def clear(self) -> None:
        """Drop all stored HP."""
        self._hp.clear()


__all__ = ["VitalityTracker"]
