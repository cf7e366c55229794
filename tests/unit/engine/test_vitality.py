"""Tests for hit point tracking."""

from __future__ import annotations

from uuid import uuid4

import pytest

from campaign_manager.core.exceptions import UnknownInstanceError, ValidationError
from campaign_manager.engine.roster import Roster
from campaign_manager.engine.vitality import VitalityTracker


@pytest.fixture
def tracked(make_character):
    """A tracker with one 30-life fighter; returns (tracker, instance_id)."""
    roster = Roster()
    instance_id = roster.add(make_character("Fighter", 30))
    return VitalityTracker(roster), instance_id


class TestVitalityTracker:
    """Tests for VitalityTracker."""

    def test_starts_at_life(self, tracked) -> None:
        """Test lazy initialization from the character's life."""
        tracker, instance_id = tracked

        assert tracker.current_hp(instance_id) == 30
        assert tracker.max_hp(instance_id) == 30

    def test_damage(self, tracked) -> None:
        """Test ordinary damage."""
        tracker, instance_id = tracked
        assert tracker.apply_damage(instance_id, 12) == 18

    def test_damage_clamps_at_zero(self, tracked) -> None:
        """Test 1000 damage from 30 leaves 0."""
        tracker, instance_id = tracked
        assert tracker.apply_damage(instance_id, 1000) == 0
        assert tracker.current_hp(instance_id) == 0

    def test_heal_clamps_at_max(self, tracked) -> None:
        """Test 1000 healing from 10/30 leaves 30."""
        tracker, instance_id = tracked
        tracker.apply_damage(instance_id, 20)

        assert tracker.apply_heal(instance_id, 1000) == 30

    def test_heal_from_zero(self, tracked) -> None:
        """Test that a downed combatant can be healed."""
        tracker, instance_id = tracked
        tracker.apply_damage(instance_id, 30)

        assert tracker.apply_heal(instance_id, 5) == 5

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_amounts_are_noops(self, tracked, amount: int) -> None:
        """Test that zero and negative amounts change nothing."""
        tracker, instance_id = tracked
        tracker.apply_damage(instance_id, 10)

        assert tracker.apply_damage(instance_id, amount) == 20
        assert tracker.apply_heal(instance_id, amount) == 20

    @pytest.mark.parametrize("amount", [1.5, "3", True])
    def test_non_integer_amount_rejected(self, tracked, amount: object) -> None:
        """Test that only integers are accepted."""
        tracker, instance_id = tracked
        with pytest.raises(ValidationError):
            tracker.apply_damage(instance_id, amount)  # type: ignore[arg-type]
        with pytest.raises(ValidationError):
            tracker.apply_heal(instance_id, amount)  # type: ignore[arg-type]

    def test_unknown_instance(self, tracked) -> None:
        """Test operations on an absent id."""
        tracker, _ = tracked
        with pytest.raises(UnknownInstanceError):
            tracker.apply_damage(uuid4(), 5)
        with pytest.raises(UnknownInstanceError):
            tracker.current_hp(uuid4())

    def test_instances_tracked_independently(self, make_character) -> None:
        """Test that two instances of one character have their own HP."""
        goblin = make_character("Goblin", 7)
        roster = Roster()
        first = roster.add(goblin)
        second = roster.add(goblin)
        tracker = VitalityTracker(roster)

        tracker.apply_damage(first, 5)

        assert tracker.current_hp(first) == 2
        assert tracker.current_hp(second) == 7
        assert goblin.life == 7

    def test_zero_life_heal_is_unbounded(self, make_character) -> None:
        """Test that healing is not capped when the character has no life."""
        roster = Roster()
        instance_id = roster.add(make_character("Spirit", None))
        tracker = VitalityTracker(roster)

        assert tracker.current_hp(instance_id) == 0
        assert tracker.apply_heal(instance_id, 15) == 15
        assert tracker.apply_damage(instance_id, 100) == 0

    def test_forget_and_clear(self, tracked) -> None:
        """Test that forgotten HP restarts from life."""
        tracker, instance_id = tracked
        tracker.apply_damage(instance_id, 10)
        tracker.forget(instance_id)
        assert tracker.current_hp(instance_id) == 30

        tracker.apply_damage(instance_id, 10)
        tracker.clear()
        assert tracker.current_hp(instance_id) == 30
