"""Tests for the custom exception hierarchy."""

from __future__ import annotations

import pytest

from campaign_manager.core.exceptions import (
    CampaignManagerError,
    CombatError,
    CombatPhaseError,
    ComponentRenderError,
    ConfigurationError,
    CSVImportError,
    DiceRollError,
    EmptyCategoryError,
    GameEngineError,
    IncompleteInitiativeError,
    InsufficientCombatantsError,
    InvalidInitiativeError,
    RandomTableError,
    StorageError,
    UIError,
    UnknownInstanceError,
    ValidationError,
)


class TestCampaignManagerError:
    """Tests for the base exception class."""

    def test_basic_message(self) -> None:
        """Test exception with just a message."""
        exc = CampaignManagerError("Something went wrong")
        assert str(exc) == "Something went wrong"
        assert exc.message == "Something went wrong"
        assert exc.details == {}

    def test_message_with_details(self) -> None:
        """Test exception with message and details."""
        exc = CampaignManagerError(
            "Operation failed",
            details={"table": "characters", "rows": 0},
        )
        assert "Operation failed" in str(exc)
        assert "table='characters'" in str(exc)
        assert "rows=0" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr."""
        exc = CampaignManagerError("Test", details={"key": "value"})
        assert "CampaignManagerError" in repr(exc)
        assert "Test" in repr(exc)


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            CombatError,
            InvalidInitiativeError,
            UnknownInstanceError,
            IncompleteInitiativeError,
            InsufficientCombatantsError,
            CombatPhaseError,
            DiceRollError,
            RandomTableError,
            EmptyCategoryError,
            CSVImportError,
        ],
    )
    def test_engine_errors_inherit_from_game_engine_error(
        self, exc_class: type[Exception]
    ) -> None:
        """Test that engine exceptions share a common base."""
        assert issubclass(exc_class, GameEngineError)
        assert issubclass(exc_class, CampaignManagerError)

    def test_combat_errors_inherit_from_combat_error(self) -> None:
        """Test that combat rejections can be caught together."""
        for exc_class in (
            InvalidInitiativeError,
            UnknownInstanceError,
            IncompleteInitiativeError,
            InsufficientCombatantsError,
            CombatPhaseError,
        ):
            assert issubclass(exc_class, CombatError)

    def test_random_table_errors(self) -> None:
        """Test random table error hierarchy."""
        assert issubclass(EmptyCategoryError, RandomTableError)
        assert issubclass(CSVImportError, RandomTableError)
        assert not issubclass(DiceRollError, RandomTableError)

    def test_ui_errors(self) -> None:
        """Test UI error hierarchy."""
        assert issubclass(ComponentRenderError, UIError)
        assert issubclass(UIError, CampaignManagerError)


class TestCombatExceptions:
    """Tests for combat exception context."""

    def test_combat_error_context(self) -> None:
        """Test CombatError with instance and phase."""
        exc = CombatError("Rejected", instance_id="abc", phase="setup")
        assert exc.details["instance_id"] == "abc"
        assert exc.details["phase"] == "setup"

    def test_invalid_initiative_keeps_zero_value(self) -> None:
        """Test that a value of 0 is still recorded."""
        exc = InvalidInitiativeError("Bad", value=0, instance_id="abc")
        assert exc.details["value"] == 0
        assert exc.details["instance_id"] == "abc"

    def test_incomplete_initiative_lists_missing(self) -> None:
        """Test IncompleteInitiativeError with missing ids."""
        exc = IncompleteInitiativeError("Missing", missing=["a", "b"])
        assert exc.details["missing"] == ["a", "b"]

    def test_insufficient_combatants(self) -> None:
        """Test InsufficientCombatantsError with counts."""
        exc = InsufficientCombatantsError("Too few", roster_size=1, required=2)
        assert exc.details == {"roster_size": 1, "required": 2}

    def test_phase_error(self) -> None:
        """Test CombatPhaseError with expected phases."""
        exc = CombatPhaseError("Wrong phase", phase="active", expected_phases=["setup"])
        assert exc.details["phase"] == "active"
        assert exc.details["expected_phases"] == ["setup"]


class TestOtherExceptions:
    """Tests for configuration, storage and engine exceptions."""

    def test_configuration_error(self) -> None:
        """Test ConfigurationError with config key."""
        exc = ConfigurationError("Bad path", config_key="database_path")
        assert exc.details["config_key"] == "database_path"

    def test_validation_error(self) -> None:
        """Test ValidationError with field info."""
        exc = ValidationError("Invalid value", field_name="amount", invalid_value="ten")
        assert exc.details["field_name"] == "amount"
        assert exc.details["invalid_value"] == "ten"

    def test_storage_error(self) -> None:
        """Test StorageError with table."""
        exc = StorageError("Insert failed", table="categories")
        assert exc.details["table"] == "categories"

    def test_dice_roll_error(self) -> None:
        """Test DiceRollError with expression."""
        exc = DiceRollError("Invalid", expression="1d")
        assert exc.details["expression"] == "1d"

    def test_random_table_error(self) -> None:
        """Test RandomTableError with category."""
        exc = EmptyCategoryError("Empty", category="Treasure")
        assert exc.details["category"] == "Treasure"


class TestExceptionChaining:
    """Tests for exception chaining behavior."""

    def test_raise_from(self) -> None:
        """Test that exceptions can be properly chained."""
        original = ValueError("Original error")

        with pytest.raises(StorageError) as exc_info:
            try:
                raise original
            except ValueError as e:
                raise StorageError("Wrapped error") from e

        assert exc_info.value.__cause__ is original
