"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Campaign Manager test suite.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from campaign_manager.models.character import Character, CharacterStatus
from campaign_manager.models.enums import CharacterCategory


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path

    from campaign_manager.engine.combat_session import CombatSession
    from campaign_manager.storage.database import Database


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from campaign_manager.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "CAMPAIGN_MANAGER_DEBUG": "true",
        "CAMPAIGN_MANAGER_LOG_LEVEL": "DEBUG",
        "CAMPAIGN_MANAGER_DATABASE_PATH": str(tmp_path / "db" / "test.db"),
        "CAMPAIGN_MANAGER_RANDOMIZER_HISTORY_LIMIT": "10",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Model Fixtures
# =============================================================================


CharacterFactory = Callable[..., Character]


@pytest.fixture
def make_character() -> CharacterFactory:
    """Provide a factory for characters with a given life value.

    Returns:
        Factory taking ``name``, ``life`` and ``category``; ``life=None``
        builds a character without a status block.
    """

    def factory(
        name: str = "Test Fighter",
        life: int | None = 30,
        category: CharacterCategory = CharacterCategory.PLAYER,
    ) -> Character:
        status = CharacterStatus(life=life) if life is not None else None
        return Character(name=name, category=category, status=status)

    return factory


@pytest.fixture
def hero(make_character: CharacterFactory) -> Character:
    """A player character with 30 life."""
    return make_character("Aria Shadowblade", 30, CharacterCategory.PLAYER)


@pytest.fixture
def goblin(make_character: CharacterFactory) -> Character:
    """A monster with 7 life."""
    return make_character("Goblin", 7, CharacterCategory.MONSTER)


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def session() -> CombatSession:
    """Provide an empty combat session."""
    from campaign_manager.engine.combat_session import CombatSession

    return CombatSession()


@pytest.fixture
def initiative_session(
    session: CombatSession,
    hero: Character,
    goblin: Character,
) -> CombatSession:
    """Provide a session with hero and goblin, in the initiative phase."""
    session.add_combatant(hero)
    session.add_combatant(goblin)
    session.proceed_to_initiative()
    return session


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def database(tmp_path: Path) -> Database:
    """Provide a database in a temporary directory."""
    from campaign_manager.storage.database import Database

    return Database(tmp_path / "campaign.db")


@pytest.fixture
def dice_roller():
    """Provide a seeded dice roller."""
    from campaign_manager.engine.dice import DiceRoller

    return DiceRoller(seed=42)
