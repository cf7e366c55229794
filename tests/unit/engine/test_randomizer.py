"""Tests for random tables."""

from __future__ import annotations

import pytest

from campaign_manager.core.config import RandomizerSettings
from campaign_manager.core.exceptions import (
    CSVImportError,
    EmptyCategoryError,
    RandomTableError,
    StorageError,
)
from campaign_manager.engine.randomizer import (
    ImportCategory,
    RandomTableService,
    decode_csv_upload,
    parse_category_csv,
)
from campaign_manager.storage.database import Database


CSV_TEXT = """Treasure,Trap,Encounter
Gold Ring,Spikes,Goblin
Healing Potion,,Orc
 Silver Key ,Pit,
"""


@pytest.fixture
def service(database: Database) -> RandomTableService:
    """Seeded random table service over a temporary database."""
    return RandomTableService(database, max_items=3, history_limit=5, seed=1)


class TestParseCategoryCSV:
    """Tests for parse_category_csv."""

    def test_columns_become_categories(self) -> None:
        """Test one category per header cell, blank cells skipped."""
        categories = parse_category_csv(CSV_TEXT)

        assert [c.name for c in categories] == ["Treasure", "Trap", "Encounter"]
        assert categories[0].items == ["Gold Ring", "Healing Potion", "Silver Key"]
        assert categories[1].items == ["Spikes", "Pit"]
        assert categories[2].items == ["Goblin", "Orc"]

    def test_blank_header_cells_skipped(self) -> None:
        """Test that unnamed columns are ignored."""
        categories = parse_category_csv(",Loot\nrock,coin\n")

        assert [c.name for c in categories] == ["Loot"]
        assert categories[0].items == ["coin"]

    def test_header_only(self) -> None:
        """Test that a header without items is rejected."""
        with pytest.raises(CSVImportError):
            parse_category_csv("Treasure,Trap\n\n")

    def test_no_category_names(self) -> None:
        """Test that a blank header row is rejected."""
        with pytest.raises(CSVImportError):
            parse_category_csv(" , \nrock,coin\n")


class TestDecodeCSVUpload:
    """Tests for decoding uploaded CSV bytes."""

    def test_utf8_with_bom(self) -> None:
        """Test that a leading byte order mark is dropped."""
        text = decode_csv_upload("\ufeffTreasure\nÉpée\n".encode("utf-8"))

        assert text == "Treasure\nÉpée\n"
        assert parse_category_csv(text)[0].name == "Treasure"

    def test_non_utf8_rejected(self) -> None:
        """Test that other encodings raise CSVImportError, not UnicodeDecodeError."""
        with pytest.raises(CSVImportError) as exc_info:
            decode_csv_upload("Trésor\nÉpée\n".encode("latin-1"))

        assert "UTF-8" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


class TestImport:
    """Tests for importing categories."""

    def test_import_csv(self, service: RandomTableService, database: Database) -> None:
        """Test importing all valid categories."""
        result = service.import_csv(CSV_TEXT)

        assert result.created == 3
        assert result.skipped == 0
        assert "3 category(ies) created" in result.message
        assert {c.name for c in database.get_all_categories()} == {"Treasure", "Trap", "Encounter"}

    def test_duplicate_names_skipped(self, service: RandomTableService) -> None:
        """Test that re-importing skips existing categories."""
        service.import_csv(CSV_TEXT)
        result = service.import_csv(CSV_TEXT)

        assert result.created == 0
        assert result.skipped == 3
        assert 'Category "Trap" already exists' in result.errors

    def test_invalid_categories_skipped(self, service: RandomTableService) -> None:
        """Test blank names, empty and oversized categories."""
        result = service.import_categories(
            [
                ImportCategory(name="  ", items=["a"]),
                ImportCategory(name="Empty", items=["", "  "]),
                ImportCategory(name="Huge", items=["a", "b", "c", "d"]),
                ImportCategory(name="Fine", items=["a", "b", "c"]),
            ]
        )

        assert result.created == 1
        assert result.skipped == 3
        assert len(result.errors) == 3
        assert any("maximum: 3" in e for e in result.errors)

    def test_storage_failure_skips_only_that_category(
        self,
        service: RandomTableService,
        database: Database,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that a failed save is reported and the batch continues."""
        create_category = database.create_category
        calls: list[str] = []

        def flaky_create(name: str, *args, **kwargs):
            calls.append(name)
            if len(calls) == 2:
                raise StorageError("disk I/O error", table="random_categories")
            return create_category(name, *args, **kwargs)

        monkeypatch.setattr(database, "create_category", flaky_create)

        result = service.import_csv(CSV_TEXT)

        assert result.created == 2
        assert result.skipped == 1
        assert calls == ["Treasure", "Trap", "Encounter"]
        assert any('"Trap" could not be saved' in e for e in result.errors)
        assert {c.name for c in database.get_all_categories()} == {"Treasure", "Encounter"}

    def test_from_settings(self, database: Database, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test building a service from settings."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CAMPAIGN_MANAGER_RANDOMIZER_MAX_ITEMS_PER_CATEGORY", "1")
        service = RandomTableService.from_settings(database, RandomizerSettings())

        result = service.import_categories([ImportCategory(name="Pair", items=["a", "b"])])

        assert result.created == 0


class TestRoll:
    """Tests for rolling and history."""

    def test_roll_records_history(self, service: RandomTableService, database: Database) -> None:
        """Test that a roll picks an item and is recorded."""
        category = database.create_category("Treasure", items=["Gold Ring", "Silver Key"])

        record = service.roll(category.id)

        assert record.category_name == "Treasure"
        assert record.item_name in {"Gold Ring", "Silver Key"}
        assert [h.id for h in service.history(category.id)] == [record.id]

    def test_every_item_reachable(self, service: RandomTableService, database: Database) -> None:
        """Test that rolling is not stuck on one item."""
        category = database.create_category("Coin", items=["Heads", "Tails"])

        seen = {service.roll(category.id).item_name for _ in range(40)}

        assert seen == {"Heads", "Tails"}

    def test_history_limit(self, service: RandomTableService, database: Database) -> None:
        """Test the default history page size."""
        category = database.create_category("Coin", items=["Heads"])
        for _ in range(8):
            service.roll(category.id)

        assert len(service.history(category.id)) == 5
        assert len(service.history(category.id, limit=8)) == 8

    def test_unknown_category(self, service: RandomTableService) -> None:
        """Test rolling on a missing category."""
        with pytest.raises(RandomTableError):
            service.roll("missing")

    def test_empty_category(self, service: RandomTableService, database: Database) -> None:
        """Test rolling on a category without items."""
        category = database.create_category("Nothing")

        with pytest.raises(EmptyCategoryError):
            service.roll(category.id)

    def test_clear_history(self, service: RandomTableService, database: Database) -> None:
        """Test clearing one category's history."""
        coin = database.create_category("Coin", items=["Heads"])
        die = database.create_category("Die", items=["Six"])
        service.roll(coin.id)
        service.roll(die.id)

        assert service.clear_history(coin.id) == 1
        assert service.history(coin.id) == []
        assert len(service.history()) == 1
