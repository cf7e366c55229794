"""Tests for dice rolling mechanics."""

from __future__ import annotations

import pytest

from campaign_manager.core.exceptions import DiceRollError
from campaign_manager.engine.dice import DiceResult, DiceRoller, RollType, roll


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_simple_d20_roll(self, dice_roller: DiceRoller) -> None:
        """Test simple d20 roll."""
        result = dice_roller.roll("1d20")

        assert isinstance(result, DiceResult)
        assert 1 <= result.total <= 20
        assert len(result.dice) == 1
        assert result.modifier == 0
        assert result.roll_type == RollType.NORMAL

    def test_roll_with_modifier(self, dice_roller: DiceRoller) -> None:
        """Test roll with positive modifier."""
        result = dice_roller.roll("1d20+5")

        assert result.modifier == 5
        assert 6 <= result.total <= 25

    def test_roll_with_negative_modifier(self, dice_roller: DiceRoller) -> None:
        """Test roll with negative modifier."""
        result = dice_roller.roll("1d20-3")

        assert result.modifier == -3

    def test_multiple_dice(self, dice_roller: DiceRoller) -> None:
        """Test rolling multiple dice."""
        result = dice_roller.roll("3d6")

        assert 3 <= result.total <= 18
        assert len(result.dice) == 3

    @pytest.mark.parametrize("roll_type", [RollType.ADVANTAGE, RollType.DISADVANTAGE])
    def test_advantage_keeps_one_die(self, dice_roller: DiceRoller, roll_type: RollType) -> None:
        """Test that advantage and disadvantage keep a single d20."""
        result = dice_roller.roll("1d20+2", roll_type=roll_type)

        assert result.roll_type == roll_type
        assert len(result.dice) == 1
        assert result.total == result.dice[0] + 2

    def test_roll_type_ignored_without_d20(self, dice_roller: DiceRoller) -> None:
        """Test that advantage only applies to d20 rolls."""
        result = dice_roller.roll("2d6", roll_type=RollType.ADVANTAGE)

        assert len(result.dice) == 2

    def test_critical_and_fumble_flags(self, dice_roller: DiceRoller) -> None:
        """Test that the flags follow the natural die."""
        for _ in range(50):
            result = dice_roller.roll_d20(3)
            assert result.is_critical == (result.dice[0] == 20)
            assert result.is_fumble == (result.dice[0] == 1)

    def test_roll_d20_negative_modifier(self, dice_roller: DiceRoller) -> None:
        """Test roll_d20 with a negative modifier."""
        result = dice_roller.roll_d20(-2)

        assert result.expression == "1d20-2"
        assert result.modifier == -2

    @pytest.mark.parametrize("expression", ["", "   ", "1d", "fireball"])
    def test_invalid_expression(self, dice_roller: DiceRoller, expression: str) -> None:
        """Test that bad expressions raise DiceRollError."""
        with pytest.raises(DiceRollError):
            dice_roller.roll(expression)


def test_module_level_roll() -> None:
    """Test the module-level roll helper."""
    result = roll("2d6")
    assert 2 <= result.total <= 12
