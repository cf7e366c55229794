"""Custom exception hierarchy for the RPG Campaign Manager.

This module defines the exception hierarchy used across the application.
All exceptions inherit from CampaignManagerError, enabling unified error
handling at the application boundary (the Streamlit UI) while preserving
domain-specific context in ``details``.

Example:
    >>> from campaign_manager.core.exceptions import UnknownInstanceError
    >>> raise UnknownInstanceError("No such combatant", instance_id="abc123")
"""

from __future__ import annotations

from typing import Any


class CampaignManagerError(Exception):
    """Base exception for all Campaign Manager errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(CampaignManagerError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(CampaignManagerError):
    """Raised when data validation fails outside of pydantic models."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(CampaignManagerError):
    """Raised when a database operation fails."""

    def __init__(
        self,
        message: str,
        *,
        table: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with table context.

        Args:
            message: Human-readable error description.
            table: Name of the table involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if table:
            combined_details["table"] = table
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Exceptions
# =============================================================================


class GameEngineError(CampaignManagerError):
    """Base exception for all game engine errors."""


class CombatError(GameEngineError):
    """Raised when a combat session operation is rejected.

    A rejected operation never leaves the session partially mutated.
    """

    def __init__(
        self,
        message: str,
        *,
        instance_id: str | None = None,
        phase: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combat context.

        Args:
            message: Human-readable error description.
            instance_id: Identifier of the combatant instance involved.
            phase: Session phase when the error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if instance_id:
            combined_details["instance_id"] = instance_id
        if phase:
            combined_details["phase"] = phase
        super().__init__(message, details=combined_details)


class InvalidInitiativeError(CombatError):
    """Raised when a negative initiative value is supplied."""

    def __init__(
        self,
        message: str,
        *,
        value: int | None = None,
        instance_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if value is not None:
            combined_details["value"] = value
        super().__init__(message, instance_id=instance_id, details=combined_details)


class UnknownInstanceError(CombatError):
    """Raised when an instance id is not present in the roster."""


class IncompleteInitiativeError(CombatError):
    """Raised when turn order is requested before every combatant has initiative."""

    def __init__(
        self,
        message: str,
        *,
        missing: list[str] | None = None,
        phase: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if missing:
            combined_details["missing"] = missing
        super().__init__(message, phase=phase, details=combined_details)


class InsufficientCombatantsError(CombatError):
    """Raised when leaving setup with too few combatants."""

    def __init__(
        self,
        message: str,
        *,
        roster_size: int | None = None,
        required: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if roster_size is not None:
            combined_details["roster_size"] = roster_size
        if required is not None:
            combined_details["required"] = required
        super().__init__(message, details=combined_details)


class CombatPhaseError(CombatError):
    """Raised when an operation is not permitted in the current phase."""

    def __init__(
        self,
        message: str,
        *,
        phase: str | None = None,
        expected_phases: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if expected_phases:
            combined_details["expected_phases"] = expected_phases
        super().__init__(message, phase=phase, details=combined_details)


class DiceRollError(GameEngineError):
    """Raised when dice rolling operations fail.

    This typically occurs when parsing invalid dice notation.
    """

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class RandomTableError(GameEngineError):
    """Raised when a random table operation fails."""

    def __init__(
        self,
        message: str,
        *,
        category: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize random table error with category context.

        Args:
            message: Human-readable error description.
            category: Id or name of the category involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if category:
            combined_details["category"] = category
        super().__init__(message, details=combined_details)


class EmptyCategoryError(RandomTableError):
    """Raised when rolling a category that has no items."""


class CSVImportError(RandomTableError):
    """Raised when a CSV payload cannot be imported at all."""


# =============================================================================
# UI Exceptions
# =============================================================================


class UIError(CampaignManagerError):
    """Base exception for all UI-related errors."""


class ComponentRenderError(UIError):
    """Raised when a UI component fails to render."""


__all__ = [
    # Base exception
    "CampaignManagerError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Storage exceptions
    "StorageError",
    # Game engine exceptions
    "GameEngineError",
    "CombatError",
    "InvalidInitiativeError",
    "UnknownInstanceError",
    "IncompleteInitiativeError",
    "InsufficientCombatantsError",
    "CombatPhaseError",
    "DiceRollError",
    "RandomTableError",
    "EmptyCategoryError",
    "CSVImportError",
    # UI exceptions
    "UIError",
    "ComponentRenderError",
]
