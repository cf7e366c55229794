"""Roster management for combat encounters.

The roster owns the combatant instances of an encounter in the order
they were added. The same character may be added any number of times.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from campaign_manager.core.exceptions import UnknownInstanceError
from campaign_manager.core.logging import get_logger
from campaign_manager.models.combat import CombatantInstance


if TYPE_CHECKING:
    from campaign_manager.models.character import Character

logger = get_logger(__name__)


class Roster:
    """Ordered collection of combatant instances.

    Instance ids are never reused for the lifetime of the roster object,
    including across ``clear()``.
    """

    def __init__(self) -> None:
        """Initialize an empty roster."""
        self._instances: dict[UUID, CombatantInstance] = {}
        self._issued_ids: set[UUID] = set()

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[CombatantInstance]:
        return iter(list(self._instances.values()))

    def __contains__(self, instance_id: object) -> bool:
        return instance_id in self._instances

    @property
    def instances(self) -> list[CombatantInstance]:
        """Get the combatant instances in insertion order."""
        return list(self._instances.values())

    def _new_instance_id(self) -> UUID:
        instance_id = uuid4()
        while instance_id in self._issued_ids:
            instance_id = uuid4()
        self._issued_ids.add(instance_id)
        return instance_id

    def add(self, character: Character) -> UUID:
        """Add a new instance of a character.

        Args:
            character: The character to add.

        Returns:
            The fresh instance id.
        """
        instance = CombatantInstance(
            instance_id=self._new_instance_id(),
            character=character,
        )
        self._instances[instance.instance_id] = instance
        logger.info(
            "Combatant added",
            instance_id=str(instance.instance_id),
            character=character.name,
            roster_size=len(self._instances),
        )
        return instance.instance_id

    def remove(self, instance_id: UUID) -> bool:
        """Remove an instance if present.

        Args:
            instance_id: Id of the instance to remove.

        Returns:
            True if an instance was removed, False if it was absent.
        """
        instance = self._instances.pop(instance_id, None)
        if instance is None:
            logger.debug("Remove ignored, instance not in roster", instance_id=str(instance_id))
            return False
        logger.info(
            "Combatant removed",
            instance_id=str(instance_id),
            character=instance.name,
            roster_size=len(self._instances),
        )
        return True

    def get(self, instance_id: UUID) -> CombatantInstance:
        """Get an instance by id.

        Args:
            instance_id: Id of the instance.

        Returns:
            The combatant instance.

        Raises:
            UnknownInstanceError: If the id is not in the roster.
        """
        instance = self._instances.get(instance_id)
        if instance is None:
            logger.warning("Unknown combatant instance", instance_id=str(instance_id))
            raise UnknownInstanceError(
                "Combatant instance not found in roster",
                instance_id=str(instance_id),
            )
        return instance

    def clear(self) -> None:
        """Remove every instance."""
        self._instances.clear()
        logger.info("Roster cleared")


__all__ = ["Roster"]
