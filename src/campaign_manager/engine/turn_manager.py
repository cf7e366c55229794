"""Initiative and turn management for combat encounters.

This module provides the initiative sequencer, which collects one
initiative value per combatant and derives the turn order, and the turn
cursor, which walks that order cyclically.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from campaign_manager.core.constants import MIN_INITIATIVE
from campaign_manager.core.exceptions import (
    IncompleteInitiativeError,
    InvalidInitiativeError,
)
from campaign_manager.core.logging import get_logger


if TYPE_CHECKING:
    from uuid import UUID

    from campaign_manager.engine.roster import Roster
    from campaign_manager.models.combat import CombatantInstance

logger = get_logger(__name__)


class InitiativeSequencer:
    """Collect initiative values and compute turn order.

    The sequencer reads and writes the ``initiative`` field of the
    instances held by a roster; it keeps no state of its own.
    """

    def __init__(self, roster: Roster) -> None:
        """Initialize the sequencer.

        Args:
            roster: The roster whose instances are sequenced.
        """
        self._roster = roster

    def set_initiative(self, instance_id: UUID, value: int) -> None:
        """Assign an initiative value, overwriting any prior value.

        Args:
            instance_id: Id of the combatant instance.
            value: Non-negative integer initiative.

        Raises:
            UnknownInstanceError: If the id is not in the roster.
            InvalidInitiativeError: If the value is negative or not an integer.
        """
        instance = self._roster.get(instance_id)

        if isinstance(value, bool) or not isinstance(value, int):
            logger.warning("Initiative rejected", instance_id=str(instance_id), value=repr(value))
            raise InvalidInitiativeError(
                f"Initiative must be an integer, got {type(value).__name__}",
                instance_id=str(instance_id),
            )
        if value < MIN_INITIATIVE:
            logger.warning("Initiative rejected", instance_id=str(instance_id), value=value)
            raise InvalidInitiativeError(
                f"Initiative must be >= {MIN_INITIATIVE}",
                value=value,
                instance_id=str(instance_id),
            )

        instance.initiative = value
        logger.info(
            "Initiative set",
            instance_id=str(instance_id),
            combatant=instance.name,
            initiative=value,
        )

    def missing_initiative(self) -> list[CombatantInstance]:
        """Get the instances that have no initiative yet.

        Returns:
            Instances without initiative, in roster order.
        """
        return [c for c in self._roster if c.initiative is None or c.initiative < MIN_INITIATIVE]

    def all_initiative_set(self) -> bool:
        """Check whether every roster instance has initiative.

        Returns:
            True if no instance is missing initiative.
        """
        return not self.missing_initiative()

    def compute_turn_order(self) -> list[CombatantInstance]:
        """Compute the turn order.

        Highest initiative goes first; ties keep roster insertion order.

        Returns:
            Instances sorted into turn order.

        Raises:
            IncompleteInitiativeError: If any instance lacks initiative.
        """
        missing = self.missing_initiative()
        if missing:
            raise IncompleteInitiativeError(
                f"{len(missing)} combatant(s) have no initiative",
                missing=[str(c.instance_id) for c in missing],
            )

        # sorted() is stable, so ties stay in insertion order
        order = sorted(self._roster, key=lambda c: -c.initiative)  # type: ignore[operator]
        logger.debug(
            "Turn order computed",
            order=[(c.name, c.initiative) for c in order],
        )
        return order


class TurnCursor:
    """Track whose turn is active and advance cyclically."""

    def __init__(self) -> None:
        """Initialize an idle cursor."""
        self._order: list[CombatantInstance] = []
        self._position: int = 0
        self._round: int = 0

    @property
    def turn_order(self) -> list[CombatantInstance]:
        """Get the frozen turn order."""
        return list(self._order)

    @property
    def position(self) -> int:
        """Get the cursor index into the turn order."""
        return self._position

    @property
    def round_number(self) -> int:
        """Get the current round (0 before start)."""
        return self._round

    def start(self, turn_order: list[CombatantInstance]) -> CombatantInstance | None:
        """Begin walking a turn order from its first entry.

        Args:
            turn_order: The order to walk; copied and frozen.

        Returns:
            The first combatant, or None if the order is empty.
        """
        self._order = list(turn_order)
        self._position = 0
        self._round = 1
        logger.info("Turn cursor started", round=self._round, combatants=len(self._order))
        return self.current()

    def current(self) -> CombatantInstance | None:
        """Get the combatant whose turn it is.

        Returns:
            The current combatant, or None if the order is empty.
        """
        if not self._order:
            return None
        return self._order[self._position]

    def advance(self) -> CombatantInstance | None:
        """Move to the next turn, wrapping to the start of the order.

        Returns:
            The new current combatant, or None if the order is empty.
        """
        if not self._order:
            return None

        self._position = (self._position + 1) % len(self._order)
        if self._position == 0:
            self._round += 1
            logger.info("New round started", round=self._round)

        current = self._order[self._position]
        logger.info("Next turn", combatant=current.name, round=self._round)
        return current

    def clear(self) -> None:
        """Drop the turn order and reset the cursor."""
        self._order = []
        self._position = 0
        self._round = 0


__all__ = [
    "InitiativeSequencer",
    "TurnCursor",
]
