"""Dice rolling using the d20 library.

Backs the d20 roller panel. Operators may use a roll as a combatant's
initiative and enter it through ``CombatSession.set_initiative``; the
combat engine itself never rolls.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import d20

from campaign_manager.core.exceptions import DiceRollError
from campaign_manager.core.logging import get_logger


logger = get_logger(__name__)


class RollType(StrEnum):
    """Types of dice rolls."""

    NORMAL = "normal"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


@dataclass(frozen=True)
class DiceResult:
    """Outcome of a dice roll.

    Attributes:
        expression: The expression as requested.
        total: The total result of the roll.
        dice: Kept individual die results.
        modifier: Static modifier applied.
        is_critical: Whether a natural 20 was kept.
        is_fumble: Whether a natural 1 was kept.
        roll_type: The type of roll performed.
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int
    is_critical: bool
    is_fumble: bool
    roll_type: RollType


def _apply_roll_type(expression: str, roll_type: RollType) -> str:
    if roll_type == RollType.NORMAL or "d20" not in expression.lower():
        return expression
    keep = "kh1" if roll_type == RollType.ADVANTAGE else "kl1"
    return expression.lower().replace("1d20", "d20").replace("d20", f"2d20{keep}", 1)


def _kept_dice(node: Any) -> list[int]:
    values: list[int] = []
    if isinstance(node, d20.Dice):
        for die in node.values:
            if die.kept:
                values.append(die.number)
    elif hasattr(node, "children"):
        for child in node.children:
            values.extend(_kept_dice(child))
    return values


class DiceRoller:
    """Roll dice expressions such as ``1d20+3`` or ``2d6``.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> result = roller.roll("1d20+5")
        >>> 6 <= result.total <= 25
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)

    def roll(
        self,
        expression: str,
        *,
        roll_type: RollType = RollType.NORMAL,
    ) -> DiceResult:
        """Roll a dice expression.

        Args:
            expression: Dice expression (e.g. '1d20+5', '2d6+3').
            roll_type: Normal, advantage or disadvantage (d20 only).

        Returns:
            The roll outcome.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result = d20.roll(_apply_roll_type(expression.strip(), roll_type))
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = _kept_dice(result.expr)
        is_d20 = "d20" in expression.lower()
        natural = dice_values[0] if is_d20 and dice_values else None

        outcome = DiceResult(
            expression=expression,
            total=result.total,
            dice=dice_values,
            modifier=result.total - sum(dice_values),
            is_critical=natural == 20,
            is_fumble=natural == 1,
            roll_type=roll_type,
        )
        logger.info(
            "Dice rolled",
            expression=expression,
            total=outcome.total,
            is_critical=outcome.is_critical,
        )
        return outcome

    def roll_d20(
        self,
        modifier: int = 0,
        *,
        roll_type: RollType = RollType.NORMAL,
    ) -> DiceResult:
        """Roll a single d20 plus a modifier."""
        sign = "+" if modifier >= 0 else ""
        return self.roll(f"1d20{sign}{modifier}", roll_type=roll_type)


_default_roller: DiceRoller | None = None


def roll(
    expression: str,
    *,
    roll_type: RollType = RollType.NORMAL,
) -> DiceResult:
    """Roll with a module-level roller.

    Example:
        >>> roll("2d6").total in range(2, 13)
        True
    """
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller()
    return _default_roller.roll(expression, roll_type=roll_type)


__all__ = [
    "RollType",
    "DiceResult",
    "DiceRoller",
    "roll",
]
