"""Combat session state machine.

A combat session moves through three phases::

    SETUP --(roster >= 2)--> INITIATIVE --(all initiative set)--> ACTIVE
    INITIATIVE --(back)--> SETUP          (initiative values are kept)
    any phase --(reset)--> SETUP          (roster, turn order, HP cleared)

The roster may only be edited in SETUP, initiative may only be entered in
INITIATIVE, and turns may only be advanced in ACTIVE. The turn order is
computed once on entering ACTIVE and stays fixed until reset. Damage and
healing may target any rostered combatant in any phase, independently of
whose turn it is.

Every rejected operation raises a CombatError subclass and leaves the
session exactly as it was.

Example:
    >>> session = CombatSession()
    >>> hero_id = session.add_combatant(hero)
    >>> goblin_id = session.add_combatant(goblin)
    >>> session.proceed_to_initiative()
    >>> session.set_initiative(hero_id, 12)
    >>> session.set_initiative(goblin_id, 8)
    >>> session.start_combat().name
    'Hero'
    >>> session.apply_damage(goblin_id, 5)
    2
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from campaign_manager.core.constants import MIN_COMBATANTS
from campaign_manager.core.exceptions import (
    CombatPhaseError,
    IncompleteInitiativeError,
    InsufficientCombatantsError,
)
from campaign_manager.core.logging import get_logger
from campaign_manager.engine.roster import Roster
from campaign_manager.engine.turn_manager import InitiativeSequencer, TurnCursor
from campaign_manager.engine.vitality import VitalityTracker
from campaign_manager.models.combat import CombatantView, CombatSnapshot
from campaign_manager.models.enums import CombatPhase


if TYPE_CHECKING:
    from campaign_manager.models.character import Character
    from campaign_manager.models.combat import CombatantInstance

logger = get_logger(__name__)


class CombatSession:
    """A single encounter: roster, initiative, turn order and HP.

    The session is single-threaded and owns its state exclusively; callers
    interact with it only through its methods.
    """

    def __init__(self) -> None:
        """Create an empty session in SETUP."""
        self.id: UUID = uuid4()
        self._phase = CombatPhase.SETUP
        self._roster = Roster()
        self._sequencer = InitiativeSequencer(self._roster)
        self._cursor = TurnCursor()
        self._vitality = VitalityTracker(self._roster)
        self._log = logger.bind(session_id=str(self.id))
        self._log.info("Combat session created")

    # =========================================================================
    # State
    # =========================================================================

    @property
    def phase(self) -> CombatPhase:
        """Get the current phase."""
        return self._phase

    @property
    def roster(self) -> list[CombatantInstance]:
        """Get the combatants in insertion order."""
        return self._roster.instances

    @property
    def turn_order(self) -> list[CombatantInstance]:
        """Get the frozen turn order (empty unless ACTIVE)."""
        return self._cursor.turn_order

    @property
    def cursor(self) -> int | None:
        """Get the turn cursor index (None unless ACTIVE)."""
        if self._phase != CombatPhase.ACTIVE:
            return None
        return self._cursor.position

    @property
    def round_number(self) -> int:
        """Get the current round (0 unless ACTIVE)."""
        return self._cursor.round_number

    def combatant(self, instance_id: UUID) -> CombatantInstance:
        """Get a rostered combatant.

        Raises:
            UnknownInstanceError: If the id is not in the roster.
        """
        return self._roster.get(instance_id)

    def _require_phase(self, operation: str, *phases: CombatPhase) -> None:
        if self._phase not in phases:
            self._log.warning(
                "Operation rejected in current phase",
                operation=operation,
                phase=self._phase.value,
            )
            raise CombatPhaseError(
                f"Cannot {operation} during {self._phase.value} phase",
                phase=self._phase.value,
                expected_phases=[p.value for p in phases],
            )

    # =========================================================================
    # Roster (SETUP)
    # =========================================================================

    def add_combatant(self, character: Character) -> UUID:
        """Add an instance of a character to the roster.

        Args:
            character: The character to add; may already be on the roster.

        Returns:
            The new instance id.

        Raises:
            CombatPhaseError: If not in SETUP.
        """
        self._require_phase("add a combatant", CombatPhase.SETUP)
        return self._roster.add(character)

    def remove_combatant(self, instance_id: UUID) -> None:
        """Remove an instance from the roster; absent ids are ignored.

        Raises:
            CombatPhaseError: If not in SETUP.
        """
        self._require_phase("remove a combatant", CombatPhase.SETUP)
        if self._roster.remove(instance_id):
            self._vitality.forget(instance_id)

    def proceed_to_initiative(self) -> None:
        """Move from SETUP to INITIATIVE.

        Raises:
            CombatPhaseError: If not in SETUP.
            InsufficientCombatantsError: If fewer than two combatants.
        """
        self._require_phase("proceed to initiative", CombatPhase.SETUP)
        if len(self._roster) < MIN_COMBATANTS:
            self._log.warning("Not enough combatants", roster_size=len(self._roster))
            raise InsufficientCombatantsError(
                f"At least {MIN_COMBATANTS} combatants are required",
                roster_size=len(self._roster),
                required=MIN_COMBATANTS,
            )
        self._phase = CombatPhase.INITIATIVE
        self._log.info("Initiative phase started", roster_size=len(self._roster))

    # =========================================================================
    # Initiative (INITIATIVE)
    # =========================================================================

    def back_to_setup(self) -> None:
        """Return from INITIATIVE to SETUP, keeping entered initiative.

        Raises:
            CombatPhaseError: If not in INITIATIVE.
        """
        self._require_phase("go back to setup", CombatPhase.INITIATIVE)
        self._phase = CombatPhase.SETUP
        self._log.info("Returned to setup")

    def set_initiative(self, instance_id: UUID, value: int) -> None:
        """Assign initiative to a combatant.

        Raises:
            CombatPhaseError: If not in INITIATIVE.
            UnknownInstanceError: If the id is not in the roster.
            InvalidInitiativeError: If the value is negative.
        """
        self._require_phase("set initiative", CombatPhase.INITIATIVE)
        self._sequencer.set_initiative(instance_id, value)

    def all_initiative_set(self) -> bool:
        """Check whether every combatant has initiative."""
        return self._sequencer.all_initiative_set()

    def compute_turn_order(self) -> list[CombatantInstance]:
        """Compute (without freezing) the turn order for the current roster.

        Raises:
            IncompleteInitiativeError: If any combatant lacks initiative.
        """
        return self._sequencer.compute_turn_order()

    def start_combat(self) -> CombatantInstance | None:
        """Move from INITIATIVE to ACTIVE, freezing the turn order.

        Returns:
            The combatant who acts first.

        Raises:
            CombatPhaseError: If not in INITIATIVE.
            IncompleteInitiativeError: If any combatant lacks initiative.
        """
        self._require_phase("start combat", CombatPhase.INITIATIVE)
        try:
            order = self._sequencer.compute_turn_order()
        except IncompleteInitiativeError as exc:
            self._log.warning("Combat start refused", missing=exc.details.get("missing"))
            raise

        first = self._cursor.start(order)
        self._phase = CombatPhase.ACTIVE
        self._log.info(
            "Combat started",
            order=[c.name for c in order],
            first=first.name if first else None,
        )
        return first

    # =========================================================================
    # Turns (ACTIVE)
    # =========================================================================

    def current(self) -> CombatantInstance | None:
        """Get whose turn it is (None unless ACTIVE)."""
        if self._phase != CombatPhase.ACTIVE:
            return None
        return self._cursor.current()

    def advance(self) -> CombatantInstance | None:
        """Advance to the next turn, wrapping around.

        Raises:
            CombatPhaseError: If not in ACTIVE.
        """
        self._require_phase("advance the turn", CombatPhase.ACTIVE)
        return self._cursor.advance()

    # =========================================================================
    # Vitality (any phase)
    # =========================================================================

    def current_hp(self, instance_id: UUID) -> int:
        """Get a combatant's current HP."""
        return self._vitality.current_hp(instance_id)

    def max_hp(self, instance_id: UUID) -> int:
        """Get a combatant's maximum HP."""
        return self._vitality.max_hp(instance_id)

    def apply_damage(self, instance_id: UUID, amount: int) -> int:
        """Apply damage to any combatant; returns the new HP."""
        return self._vitality.apply_damage(instance_id, amount)

    def apply_heal(self, instance_id: UUID, amount: int) -> int:
        """Apply healing to any combatant; returns the new HP."""
        return self._vitality.apply_heal(instance_id, amount)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def reset(self) -> None:
        """Discard roster, turn order, cursor and HP; return to SETUP."""
        self._roster.clear()
        self._cursor.clear()
        self._vitality.clear()
        self._phase = CombatPhase.SETUP
        self._log.info("Combat session reset")

    def snapshot(self) -> CombatSnapshot:
        """Build a read-only snapshot for rendering."""
        views = [
            CombatantView(
                instance_id=c.instance_id,
                character_id=c.character.id,
                name=c.name,
                category=c.character.category,
                initiative=c.initiative,
                current_hp=self._vitality.current_hp(c.instance_id),
                max_hp=c.character.life,
            )
            for c in self._roster
        ]
        current = self.current()
        return CombatSnapshot(
            phase=self._phase,
            roster=views,
            turn_order=[c.instance_id for c in self.turn_order],
            cursor=self.cursor,
            round_number=self.round_number,
            current_instance_id=current.instance_id if current else None,
        )


__all__ = ["CombatSession"]
