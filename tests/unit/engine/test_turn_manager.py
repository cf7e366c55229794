"""Tests for initiative sequencing and the turn cursor."""

from __future__ import annotations

from uuid import uuid4

import pytest

from campaign_manager.core.exceptions import (
    IncompleteInitiativeError,
    InvalidInitiativeError,
    UnknownInstanceError,
)
from campaign_manager.engine.roster import Roster
from campaign_manager.engine.turn_manager import InitiativeSequencer, TurnCursor
from campaign_manager.models import Character


@pytest.fixture
def roster(make_character) -> Roster:
    """Roster of four distinct characters A, B, C, D."""
    roster = Roster()
    for name in "ABCD":
        roster.add(make_character(name))
    return roster


def _ids(roster: Roster) -> list:
    return [c.instance_id for c in roster]


class TestInitiativeSequencer:
    """Tests for InitiativeSequencer."""

    def test_set_and_overwrite(self, roster: Roster) -> None:
        """Test that a later value replaces an earlier one."""
        sequencer = InitiativeSequencer(roster)
        a = _ids(roster)[0]

        sequencer.set_initiative(a, 12)
        sequencer.set_initiative(a, 3)

        assert roster.get(a).initiative == 3

    def test_zero_is_valid(self, roster: Roster) -> None:
        """Test that 0 is an accepted initiative."""
        sequencer = InitiativeSequencer(roster)
        a = _ids(roster)[0]

        sequencer.set_initiative(a, 0)

        assert roster.get(a).initiative == 0
        assert roster.get(a) not in sequencer.missing_initiative()

    def test_negative_rejected(self, roster: Roster) -> None:
        """Test that negative values leave the instance untouched."""
        sequencer = InitiativeSequencer(roster)
        a = _ids(roster)[0]
        sequencer.set_initiative(a, 5)

        with pytest.raises(InvalidInitiativeError):
            sequencer.set_initiative(a, -1)

        assert roster.get(a).initiative == 5

    @pytest.mark.parametrize("value", [2.5, "7", True, None])
    def test_non_integer_rejected(self, roster: Roster, value: object) -> None:
        """Test that only integers are accepted."""
        sequencer = InitiativeSequencer(roster)
        with pytest.raises(InvalidInitiativeError):
            sequencer.set_initiative(_ids(roster)[0], value)  # type: ignore[arg-type]

    def test_unknown_instance(self, roster: Roster) -> None:
        """Test setting initiative for an absent id."""
        sequencer = InitiativeSequencer(roster)
        with pytest.raises(UnknownInstanceError):
            sequencer.set_initiative(uuid4(), 10)

    def test_all_initiative_set(self, roster: Roster) -> None:
        """Test the completeness check."""
        sequencer = InitiativeSequencer(roster)
        ids = _ids(roster)

        for instance_id in ids[:-1]:
            sequencer.set_initiative(instance_id, 1)
        assert sequencer.all_initiative_set() is False
        assert [c.instance_id for c in sequencer.missing_initiative()] == [ids[-1]]

        sequencer.set_initiative(ids[-1], 1)
        assert sequencer.all_initiative_set() is True

    def test_turn_order_descending_with_stable_ties(self, roster: Roster) -> None:
        """Test ordering [5, 10, 10, 1] as B, C, A, D."""
        sequencer = InitiativeSequencer(roster)
        for instance_id, value in zip(_ids(roster), [5, 10, 10, 1]):
            sequencer.set_initiative(instance_id, value)

        order = sequencer.compute_turn_order()

        assert [c.name for c in order] == ["B", "C", "A", "D"]

    def test_all_tied_keeps_insertion_order(self, roster: Roster) -> None:
        """Test that equal values keep roster order."""
        sequencer = InitiativeSequencer(roster)
        for instance_id in _ids(roster):
            sequencer.set_initiative(instance_id, 7)

        assert [c.name for c in sequencer.compute_turn_order()] == ["A", "B", "C", "D"]

    def test_incomplete_raises(self, roster: Roster) -> None:
        """Test that turn order needs every initiative."""
        sequencer = InitiativeSequencer(roster)
        ids = _ids(roster)
        sequencer.set_initiative(ids[0], 3)

        with pytest.raises(IncompleteInitiativeError) as exc_info:
            sequencer.compute_turn_order()

        assert exc_info.value.details["missing"] == [str(i) for i in ids[1:]]


class TestTurnCursor:
    """Tests for TurnCursor."""

    def test_idle_cursor(self) -> None:
        """Test a cursor that was never started."""
        cursor = TurnCursor()

        assert cursor.current() is None
        assert cursor.advance() is None
        assert cursor.round_number == 0

    def test_start(self, roster: Roster) -> None:
        """Test starting at the first entry in round 1."""
        cursor = TurnCursor()
        first = cursor.start(roster.instances)

        assert first is roster.instances[0]
        assert cursor.position == 0
        assert cursor.round_number == 1

    def test_wraparound(self, make_character) -> None:
        """Test X, Y, Z, X when advancing from the last entry."""
        cursor = TurnCursor()
        roster = Roster()
        for name in "XYZ":
            roster.add(make_character(name))
        cursor.start(roster.instances)

        names = [cursor.advance().name for _ in range(3)]  # type: ignore[union-attr]

        assert names == ["Y", "Z", "X"]
        assert cursor.position == 0
        assert cursor.round_number == 2

    def test_turn_order_is_frozen_copy(self, roster: Roster) -> None:
        """Test that later roster changes do not affect the order."""
        cursor = TurnCursor()
        order = roster.instances
        cursor.start(order)
        order.pop()

        assert len(cursor.turn_order) == 4

    def test_clear(self, roster: Roster) -> None:
        """Test clearing the cursor."""
        cursor = TurnCursor()
        cursor.start(roster.instances)
        cursor.clear()

        assert cursor.turn_order == []
        assert cursor.current() is None
        assert cursor.round_number == 0


def test_sequencer_reads_shared_characters(make_character) -> None:
    """Test two instances of one character carry separate initiative."""
    goblin: Character = make_character("Goblin", 7)
    roster = Roster()
    first = roster.add(goblin)
    second = roster.add(goblin)
    sequencer = InitiativeSequencer(roster)

    sequencer.set_initiative(first, 4)
    sequencer.set_initiative(second, 9)

    assert [c.instance_id for c in sequencer.compute_turn_order()] == [second, first]
