"""SQLite persistence layer for the RPG Campaign Manager.

Provides persistent storage for:
- Character records
- Random table categories and their items
- Random table roll history
- The rules resource catalog (skills, qualities and drawbacks)

Combat sessions are never persisted.

Default location: data/campaign_manager.db (see StorageSettings)
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Generator
from uuid import UUID, uuid4

from campaign_manager.core.config import get_settings
from campaign_manager.core.exceptions import StorageError
from campaign_manager.core.logging import get_logger
from campaign_manager.models.character import Character
from campaign_manager.models.enums import SkillType
from campaign_manager.models.resources import ResourceQualityDrawback, ResourceSkill

logger = get_logger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class CategoryRecord:
    """A random table category.

    Attributes:
        id: Unique identifier.
        name: Display name.
        description: Optional description.
        created_at: When the category was created.
    """

    id: str
    name: str
    description: str | None
    created_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> CategoryRecord:
        """Create from database row."""
        return cls(
            id=row[0],
            name=row[1],
            description=row[2],
            created_at=datetime.fromisoformat(row[3]),
        )


@dataclass
class RandomItemRecord:
    """An item that can be rolled from a category.

    ``weight`` is the in-game physical weight of the item; it does not
    affect roll probability.
    """

    id: str
    category_id: str
    name: str
    description: str | None
    weight: float | None
    rarity: str | None
    created_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> RandomItemRecord:
        """Create from database row."""
        return cls(
            id=row[0],
            category_id=row[1],
            name=row[2],
            description=row[3],
            weight=row[4],
            rarity=row[5],
            created_at=datetime.fromisoformat(row[6]),
        )


@dataclass
class RollRecord:
    """A roll history entry, joined with its category and item names."""

    id: str
    category_id: str
    category_name: str
    item_id: str
    item_name: str
    item_description: str | None
    rolled_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> RollRecord:
        """Create from database row."""
        return cls(
            id=row[0],
            category_id=row[1],
            category_name=row[2],
            item_id=row[3],
            item_name=row[4],
            item_description=row[5],
            rolled_at=datetime.fromisoformat(row[6]),
        )


_ROLL_SELECT = """
    SELECT h.id, h.category_id, c.name, h.item_id, i.name, i.description, h.created_at
    FROM roll_history h
    JOIN categories c ON c.id = h.category_id
    JOIN random_items i ON i.id = h.item_id
"""

_SKILL_SELECT = """
    SELECT id, name, description, type, page, created_at FROM resource_skills
"""

_QUALITY_SELECT = """
    SELECT id, name, description, cost, page, created_at FROM resource_qualities_drawbacks
"""


def _skill_from_row(row: tuple[Any, ...]) -> ResourceSkill:
    return ResourceSkill(
        id=UUID(row[0]),
        name=row[1],
        description=row[2],
        type=SkillType(row[3]),
        page=row[4],
        created_at=datetime.fromisoformat(row[5]),
    )


def _quality_from_row(row: tuple[Any, ...]) -> ResourceQualityDrawback:
    return ResourceQualityDrawback(
        id=UUID(row[0]),
        name=row[1],
        description=row[2],
        cost=row[3],
        page=row[4],
        created_at=datetime.fromisoformat(row[5]),
    )


# =============================================================================
# Database Class
# =============================================================================


class Database:
    """SQLite database for campaign data."""

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize database.

        Args:
            db_path: Path to database file. If None, uses the configured path.
        """
        if db_path is None:
            self.db_path = get_settings().storage.database_path
        else:
            self.db_path = Path(db_path)

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

        logger.info("Database initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open database: {exc}") from exc
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StorageError(f"Database operation failed: {exc}") from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS characters (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    category TEXT NOT NULL,
                    data_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS categories (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    description TEXT,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS random_items (
                    id TEXT PRIMARY KEY,
                    category_id TEXT NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
                    name TEXT NOT NULL,
                    description TEXT,
                    weight REAL,
                    rarity TEXT,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS roll_history (
                    id TEXT PRIMARY KEY,
                    category_id TEXT NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
                    item_id TEXT NOT NULL REFERENCES random_items(id) ON DELETE CASCADE,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS resource_skills (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    description TEXT,
                    type TEXT NOT NULL,
                    page INTEGER,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS resource_qualities_drawbacks (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    description TEXT,
                    cost INTEGER NOT NULL,
                    page INTEGER,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_characters_created
                ON characters(created_at DESC)
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_items_category
                ON random_items(category_id)
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_history_created
                ON roll_history(created_at DESC)
            """)

            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    # =========================================================================
    # Character Operations
    # =========================================================================

    def save_character(self, character: Character) -> Character:
        """Insert or update a character.

        Args:
            character: The character to store.

        Returns:
            The stored character.
        """
        now = datetime.now().isoformat()
        data_json = character.model_dump_json()

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE characters
                SET name = ?, category = ?, data_json = ?, updated_at = ?
                WHERE id = ?
            """, (character.name, character.category.value, data_json, now, str(character.id)))

            if cursor.rowcount == 0:
                cursor.execute("""
                    INSERT INTO characters (id, name, category, data_json, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                """, (
                    str(character.id),
                    character.name,
                    character.category.value,
                    data_json,
                    character.created_at.isoformat(),
                    now,
                ))

        logger.info("Saved character", name=character.name, id=str(character.id))
        return character

    def get_character(self, character_id: UUID | str) -> Character | None:
        """Get a character by id.

        Returns:
            The character if found, None otherwise.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT data_json FROM characters WHERE id = ?",
                (str(character_id),),
            )
            row = cursor.fetchone()

        if row:
            return Character.model_validate_json(row[0])
        return None

    def get_all_characters(self) -> list[Character]:
        """Get all characters, newest first."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT data_json FROM characters
                ORDER BY created_at DESC, rowid DESC
            """)
            rows = cursor.fetchall()

        return [Character.model_validate_json(row[0]) for row in rows]

    def delete_character(self, character_id: UUID | str) -> bool:
        """Delete a character.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM characters WHERE id = ?", (str(character_id),))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Deleted character", id=str(character_id))

        return deleted

    def delete_all_characters(self) -> int:
        """Delete every character.

        Returns:
            Number of characters deleted.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM characters")
            deleted = cursor.rowcount

        logger.info("Deleted all characters", deleted=deleted)
        return deleted

    def get_character_count(self) -> int:
        """Get total number of stored characters."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM characters")
            return cursor.fetchone()[0]

    # =========================================================================
    # Random Table Operations
    # =========================================================================

    def create_category(
        self,
        name: str,
        description: str | None = None,
        items: list[str] | None = None,
    ) -> CategoryRecord:
        """Create a category, optionally with items, in one transaction.

        Args:
            name: Category name.
            description: Optional description.
            items: Optional item names to create with the category.

        Returns:
            The created category.
        """
        record = CategoryRecord(
            id=str(uuid4()),
            name=name,
            description=description,
            created_at=datetime.now(),
        )

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO categories (id, name, description, created_at)
                VALUES (?, ?, ?, ?)
            """, (record.id, record.name, record.description, record.created_at.isoformat()))

            for item_name in items or []:
                cursor.execute("""
                    INSERT INTO random_items (id, category_id, name, created_at)
                    VALUES (?, ?, ?, ?)
                """, (str(uuid4()), record.id, item_name, datetime.now().isoformat()))

        logger.info("Created category", name=name, items=len(items or []))
        return record

    def get_category(self, category_id: str) -> CategoryRecord | None:
        """Get a category by id."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, name, description, created_at
                FROM categories WHERE id = ?
            """, (category_id,))
            row = cursor.fetchone()

        if row:
            return CategoryRecord.from_row(tuple(row))
        return None

    def get_category_by_name(self, name: str) -> CategoryRecord | None:
        """Get a category by exact name (for deduplication)."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, name, description, created_at
                FROM categories WHERE name = ?
            """, (name,))
            row = cursor.fetchone()

        if row:
            return CategoryRecord.from_row(tuple(row))
        return None

    def get_all_categories(self) -> list[CategoryRecord]:
        """Get all categories, newest first."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, name, description, created_at
                FROM categories ORDER BY created_at DESC, rowid DESC
            """)
            return [CategoryRecord.from_row(tuple(row)) for row in cursor.fetchall()]

    def delete_category(self, category_id: str) -> bool:
        """Delete a category together with its items and roll history.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM roll_history WHERE category_id = ?", (category_id,))
            cursor.execute("DELETE FROM random_items WHERE category_id = ?", (category_id,))
            cursor.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Deleted category", id=category_id)

        return deleted

    def add_item(
        self,
        category_id: str,
        name: str,
        *,
        description: str | None = None,
        weight: float | None = None,
        rarity: str | None = None,
    ) -> RandomItemRecord:
        """Add an item to a category."""
        record = RandomItemRecord(
            id=str(uuid4()),
            category_id=category_id,
            name=name,
            description=description,
            weight=weight,
            rarity=rarity,
            created_at=datetime.now(),
        )

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO random_items
                (id, category_id, name, description, weight, rarity, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (record.id, record.category_id, record.name, record.description,
                  record.weight, record.rarity, record.created_at.isoformat()))

        return record

    def get_items(self, category_id: str) -> list[RandomItemRecord]:
        """Get the items of a category in creation order."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, category_id, name, description, weight, rarity, created_at
                FROM random_items WHERE category_id = ?
                ORDER BY rowid
            """, (category_id,))
            return [RandomItemRecord.from_row(tuple(row)) for row in cursor.fetchall()]

    def add_roll(self, category_id: str, item_id: str) -> RollRecord:
        """Record a roll in history.

        Returns:
            The history entry, joined with category and item names.
        """
        roll_id = str(uuid4())

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO roll_history (id, category_id, item_id, created_at)
                VALUES (?, ?, ?, ?)
            """, (roll_id, category_id, item_id, datetime.now().isoformat()))
            cursor.execute(_ROLL_SELECT + " WHERE h.id = ?", (roll_id,))
            row = cursor.fetchone()

        return RollRecord.from_row(tuple(row))

    def get_roll_history(
        self,
        category_id: str | None = None,
        limit: int = 50,
    ) -> list[RollRecord]:
        """Get roll history, newest first.

        Args:
            category_id: Restrict to one category.
            limit: Maximum number of entries.
        """
        query = _ROLL_SELECT
        params: list[Any] = []
        if category_id:
            query += " WHERE h.category_id = ?"
            params.append(category_id)
        query += " ORDER BY h.created_at DESC, h.rowid DESC LIMIT ?"
        params.append(limit)

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [RollRecord.from_row(tuple(row)) for row in cursor.fetchall()]

    def clear_roll_history(self, category_id: str | None = None) -> int:
        """Delete roll history, optionally for one category only.

        Returns:
            Number of entries deleted.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            if category_id:
                cursor.execute("DELETE FROM roll_history WHERE category_id = ?", (category_id,))
            else:
                cursor.execute("DELETE FROM roll_history")
            deleted = cursor.rowcount

        logger.info("Cleared roll history", category_id=category_id, deleted=deleted)
        return deleted

    # =========================================================================
    # Resource Catalog Operations
    # =========================================================================

    def save_resource_skill(self, skill: ResourceSkill) -> ResourceSkill:
        """Insert or update a catalog skill."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE resource_skills
                SET name = ?, description = ?, type = ?, page = ?
                WHERE id = ?
            """, (skill.name, skill.description, skill.type.value, skill.page, str(skill.id)))

            if cursor.rowcount == 0:
                cursor.execute("""
                    INSERT INTO resource_skills (id, name, description, type, page, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                """, (
                    str(skill.id),
                    skill.name,
                    skill.description,
                    skill.type.value,
                    skill.page,
                    skill.created_at.isoformat(),
                ))

        logger.info("Saved resource skill", name=skill.name, id=str(skill.id))
        return skill

    def get_resource_skill(self, skill_id: UUID | str) -> ResourceSkill | None:
        """Get a catalog skill by id."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(_SKILL_SELECT + " WHERE id = ?", (str(skill_id),))
            row = cursor.fetchone()

        if row:
            return _skill_from_row(tuple(row))
        return None

    def get_all_resource_skills(self) -> list[ResourceSkill]:
        """Get all catalog skills, newest first."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(_SKILL_SELECT + " ORDER BY created_at DESC, rowid DESC")
            return [_skill_from_row(tuple(row)) for row in cursor.fetchall()]

    def delete_resource_skill(self, skill_id: UUID | str) -> bool:
        """Delete a catalog skill.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM resource_skills WHERE id = ?", (str(skill_id),))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Deleted resource skill", id=str(skill_id))
        return deleted

    def save_resource_quality(self, entry: ResourceQualityDrawback) -> ResourceQualityDrawback:
        """Insert or update a catalog quality or drawback."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE resource_qualities_drawbacks
                SET name = ?, description = ?, cost = ?, page = ?
                WHERE id = ?
            """, (entry.name, entry.description, entry.cost, entry.page, str(entry.id)))

            if cursor.rowcount == 0:
                cursor.execute("""
                    INSERT INTO resource_qualities_drawbacks
                    (id, name, description, cost, page, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                """, (
                    str(entry.id),
                    entry.name,
                    entry.description,
                    entry.cost,
                    entry.page,
                    entry.created_at.isoformat(),
                ))

        logger.info("Saved resource quality", name=entry.name, cost=entry.cost)
        return entry

    def get_resource_quality(self, entry_id: UUID | str) -> ResourceQualityDrawback | None:
        """Get a catalog quality or drawback by id."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(_QUALITY_SELECT + " WHERE id = ?", (str(entry_id),))
            row = cursor.fetchone()

        if row:
            return _quality_from_row(tuple(row))
        return None

    def get_all_resource_qualities(self) -> list[ResourceQualityDrawback]:
        """Get all catalog qualities and drawbacks, newest first."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(_QUALITY_SELECT + " ORDER BY created_at DESC, rowid DESC")
            return [_quality_from_row(tuple(row)) for row in cursor.fetchall()]

    def delete_resource_quality(self, entry_id: UUID | str) -> bool:
        """Delete a catalog quality or drawback.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM resource_qualities_drawbacks WHERE id = ?",
                (str(entry_id),),
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Deleted resource quality", id=str(entry_id))
        return deleted


# =============================================================================
# Singleton Instance
# =============================================================================


_database_instance: Database | None = None


def get_database() -> Database:
    """Get the global database instance."""
    global _database_instance

    if _database_instance is None:
        _database_instance = Database()

    return _database_instance


__all__ = [
    "Database",
    "CategoryRecord",
    "RandomItemRecord",
    "RollRecord",
    "get_database",
]
