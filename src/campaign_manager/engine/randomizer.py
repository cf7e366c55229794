"""Random tables: CSV import, rolling and roll history.

A random table is a named category of items. Rolling picks one item with
equal probability; an item's ``weight`` is its in-game weight and has no
effect on the odds.

CSV layout: the first row names the categories, one per column; every
following row adds one item to each column that has a non-blank cell::

    Treasure,Trap,Encounter
    Gold Ring,Spikes,Goblin
    Healing Potion,Pit,Orc
"""

from __future__ import annotations

import csv
import io
import random
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from campaign_manager.core.constants import DEFAULT_HISTORY_LIMIT, MAX_ITEMS_PER_CATEGORY
from campaign_manager.core.exceptions import (
    CSVImportError,
    EmptyCategoryError,
    RandomTableError,
    StorageError,
)
from campaign_manager.core.logging import get_logger


if TYPE_CHECKING:
    from campaign_manager.core.config import RandomizerSettings
    from campaign_manager.storage.database import Database, RollRecord

logger = get_logger(__name__)


class ImportCategory(BaseModel):
    """A category parsed from an import payload."""

    name: str = Field(description="Category name, possibly blank")
    items: list[str] = Field(default_factory=list, description="Item names, possibly blank")


class ImportResult(BaseModel):
    """Outcome of importing a batch of categories.

    Attributes:
        created: Number of categories created.
        skipped: Number of categories rejected.
        errors: One message per rejected category.
    """

    created: int = 0
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)

    @property
    def message(self) -> str:
        """One-line summary for display."""
        return f"Import finished: {self.created} category(ies) created, {self.skipped} skipped"


def decode_csv_upload(data: bytes) -> str:
    """Decode an uploaded CSV file as UTF-8, dropping a leading BOM.

    Raises:
        CSVImportError: If the bytes are not valid UTF-8.
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise CSVImportError(
            "CSV file must be UTF-8 encoded",
            details={"position": exc.start},
        ) from exc


def parse_category_csv(text: str) -> list[ImportCategory]:
    """Parse a column-per-category CSV.

    Args:
        text: CSV content.

    Returns:
        One ImportCategory per non-blank header cell, with its non-blank items.

    Raises:
        CSVImportError: If there is no item row or no category name.
    """
    rows = list(csv.reader(io.StringIO(text)))
    rows = [row for row in rows if any(cell.strip() for cell in row)]

    if len(rows) < 2:
        raise CSVImportError("CSV must have at least 2 rows (header + items)")

    header = rows[0]
    columns = [(index, name.strip()) for index, name in enumerate(header) if name.strip()]
    if not columns:
        raise CSVImportError("No category names found in the first row")

    categories = []
    for index, name in columns:
        items = [
            row[index].strip()
            for row in rows[1:]
            if index < len(row) and row[index].strip()
        ]
        categories.append(ImportCategory(name=name, items=items))

    logger.debug("Parsed category CSV", categories=len(categories))
    return categories


class RandomTableService:
    """Import, roll and review random tables stored in a database."""

    def __init__(
        self,
        database: Database,
        *,
        max_items: int = MAX_ITEMS_PER_CATEGORY,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        seed: int | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            database: Where categories, items and history live.
            max_items: Largest category accepted by import.
            history_limit: Default history page size.
            seed: Optional seed for reproducible rolls.
        """
        self._db = database
        self._max_items = max_items
        self._history_limit = history_limit
        self._rng = random.Random(seed)

    @classmethod
    def from_settings(cls, database: Database, settings: RandomizerSettings) -> RandomTableService:
        """Build a service from RandomizerSettings."""
        return cls(
            database,
            max_items=settings.max_items_per_category,
            history_limit=settings.history_limit,
            seed=settings.seed,
        )

    def import_categories(self, categories: list[ImportCategory]) -> ImportResult:
        """Create categories, skipping invalid or duplicate ones.

        A category is skipped when its name is blank, when it has no
        non-blank items, when it has more than ``max_items`` items, or when
        a category with the same name already exists. A category that fails
        to save is skipped too; the rest of the batch is still imported.

        Args:
            categories: Parsed categories.

        Returns:
            Counts of created and skipped categories with reasons.
        """
        result = ImportResult()

        for category in categories:
            name = category.name.strip()
            if not name:
                result.errors.append("Unnamed category ignored")
                result.skipped += 1
                continue

            items = [item.strip() for item in category.items if item and item.strip()]
            if not items:
                result.errors.append(f'Category "{name}" ignored: no valid items')
                result.skipped += 1
                continue

            if len(items) > self._max_items:
                result.errors.append(
                    f'Category "{name}" ignored: {len(items)} items (maximum: {self._max_items})'
                )
                result.skipped += 1
                continue

            try:
                if self._db.get_category_by_name(name) is not None:
                    result.errors.append(f'Category "{name}" already exists')
                    result.skipped += 1
                    continue
                self._db.create_category(name, items=items)
            except StorageError as exc:
                logger.warning("Category import failed", category=name, error=exc.message)
                result.errors.append(f'Category "{name}" could not be saved: {exc.message}')
                result.skipped += 1
                continue

            result.created += 1

        logger.info(
            "Categories imported",
            created=result.created,
            skipped=result.skipped,
        )
        return result

    def import_csv(self, text: str) -> ImportResult:
        """Parse and import a CSV payload.

        Raises:
            CSVImportError: If the payload has no usable header or item rows.
        """
        return self.import_categories(parse_category_csv(text))

    def roll(self, category_id: str) -> RollRecord:
        """Pick one item uniformly at random and record it in history.

        Args:
            category_id: Category to roll on.

        Returns:
            The recorded roll.

        Raises:
            RandomTableError: If the category does not exist.
            EmptyCategoryError: If the category has no items.
        """
        category = self._db.get_category(category_id)
        if category is None:
            raise RandomTableError("Category not found", category=category_id)

        items = self._db.get_items(category_id)
        if not items:
            raise EmptyCategoryError("No items found in this category", category=category.name)

        item = self._rng.choice(items)
        record = self._db.add_roll(category.id, item.id)
        logger.info("Rolled random table", category=category.name, item=item.name)
        return record

    def history(
        self,
        category_id: str | None = None,
        limit: int | None = None,
    ) -> list[RollRecord]:
        """Get roll history, newest first."""
        return self._db.get_roll_history(category_id, limit or self._history_limit)

    def clear_history(self, category_id: str | None = None) -> int:
        """Delete roll history, optionally for one category only."""
        return self._db.clear_roll_history(category_id)


__all__ = [
    "ImportCategory",
    "ImportResult",
    "decode_csv_upload",
    "parse_category_csv",
    "RandomTableService",
]
