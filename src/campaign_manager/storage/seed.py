"""Demo data for a fresh database.

Recreates a small roster of characters with randomised attributes and
status so the combat tracker has something to work with.
"""

from __future__ import annotations

import random

from campaign_manager.core.logging import get_logger
from campaign_manager.models.character import (
    Character,
    CharacterAttributes,
    CharacterSkill,
    CharacterStatus,
    CharacterTrait,
)
from campaign_manager.models.enums import CharacterCategory, QualityKind
from campaign_manager.storage.database import Database

logger = get_logger(__name__)


DEMO_CHARACTERS: list[tuple[str, CharacterCategory]] = [
    ("Aria Shadowblade", CharacterCategory.PLAYER),
    ("Marcus Ironheart", CharacterCategory.PLAYER),
    ("Elena Moonwhisper", CharacterCategory.NPC),
    ("Viktor Stormborn", CharacterCategory.ALLY),
    ("Selena Nightshade", CharacterCategory.MONSTER),
]


def build_demo_character(
    name: str,
    category: CharacterCategory,
    rng: random.Random,
) -> Character:
    """Build one demo character with randomised numbers."""
    return Character(
        name=name,
        category=category,
        age=rng.randint(18, 50),
        weight=rng.randint(50, 100),
        height=rng.randint(150, 200),
        attributes=CharacterAttributes(
            strength=rng.randint(5, 15),
            intelligence=rng.randint(5, 15),
            dexterity=rng.randint(5, 15),
            perception=rng.randint(5, 15),
            constitution=rng.randint(5, 15),
            will_power=rng.randint(5, 15),
        ),
        status=CharacterStatus(
            life=rng.randint(50, 150),
            endurance=rng.randint(50, 150),
            speed=rng.randint(5, 20),
            max_load=rng.randint(30, 80),
        ),
        skills=[
            CharacterSkill(
                name="Swordsmanship",
                level=rng.randint(1, 10),
                description="Mastery of bladed weapons",
            ),
            CharacterSkill(
                name="Stealth",
                level=rng.randint(1, 10),
                description="Moving without being detected",
            ),
        ],
        traits=[
            CharacterTrait(
                name="Quick Reflexes",
                kind=QualityKind.QUALITY,
                level=rng.randint(1, 5),
                description="React faster in combat situations",
            ),
            CharacterTrait(
                name="Fear of Heights",
                kind=QualityKind.DRAWBACK,
                level=rng.randint(1, 3),
                description="Uncomfortable in high places",
            ),
        ],
    )


def seed_characters(
    database: Database,
    *,
    rng: random.Random | None = None,
    replace: bool = False,
) -> list[Character]:
    """Store the demo characters.

    Seeding never duplicates the demo roster: an already populated store is
    left alone unless ``replace`` is set, in which case every stored
    character is deleted first.

    Args:
        database: Target database.
        rng: Random source; a fresh one is used if omitted.
        replace: Delete existing characters before seeding.

    Returns:
        The stored characters, empty if seeding was skipped.
    """
    if replace:
        database.delete_all_characters()
    elif database.get_character_count() > 0:
        logger.info("Seeding skipped, characters already stored")
        return []

    rng = rng or random.Random()
    created = [
        database.save_character(build_demo_character(name, category, rng))
        for name, category in DEMO_CHARACTERS
    ]
    logger.info("Seeded demo characters", count=len(created))
    return created


__all__ = [
    "DEMO_CHARACTERS",
    "build_demo_character",
    "seed_characters",
]
