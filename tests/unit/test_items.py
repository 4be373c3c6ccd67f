"""Tests for the local item store."""

import json
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from landmark.exceptions import ItemStoreError
from landmark.models.item import Item
from landmark.store.items import ItemStore


@pytest.fixture
def store(tmp_path):
    """Item store backed by a temp file."""
    return ItemStore(tmp_path / "data" / "items.json")


class TestItem:
    """Tests for the Item model."""

    def test_defaults(self):
        """Test default id, timestamp and title."""
        item = Item()
        assert isinstance(item.id, uuid.UUID)
        assert item.timestamp.tzinfo is not None
        assert item.title == "New Item"
        assert item.content is None

    def test_unique_ids(self):
        assert Item().id != Item().id

    def test_display_title(self):
        """Test empty titles display as Untitled."""
        assert Item(title="").display_title == "Untitled"
        assert Item(title="Groceries").display_title == "Groceries"

    def test_formatted_date(self):
        """Test abbreviated date with short time."""
        local = datetime(2026, 10, 18, 14, 5).astimezone()
        item = Item(timestamp=local)
        assert item.formatted_date == "Oct 18, 2026 at 2:05 PM"


class TestItemStore:
    """Tests for ItemStore."""

    def test_empty_store(self, store):
        """Test a missing file is an empty store."""
        assert store.list() == []

    def test_create_persists(self, store):
        """Test created items survive a new store instance."""
        item = store.create(title="First", content="body")

        reopened = ItemStore(store.path)
        assert reopened.list() == [item]
        assert reopened.get(item.id) == item

    def test_timestamps_stored_iso8601(self, store):
        """Test timestamps are written as ISO-8601 strings."""
        item = store.create()
        raw = json.loads(store.path.read_text())
        assert datetime.fromisoformat(raw[0]["timestamp"].replace("Z", "+00:00")) == item.timestamp

    def test_list_newest_first(self, store):
        """Test items are ordered by timestamp, descending."""
        older = store.create(title="older")
        newer = store.create(title="newer")
        # Force a strict ordering independent of clock resolution
        items = [
            older.model_copy(update={"timestamp": older.timestamp - timedelta(minutes=1)}),
            newer,
        ]
        store._write_all(items)

        assert [item.title for item in store.list()] == ["newer", "older"]

    def test_get_missing(self, store):
        assert store.get(uuid.uuid4()) is None

    def test_get_accepts_string_id(self, store):
        item = store.create()
        assert store.get(str(item.id)) == item

    def test_delete(self, store):
        """Test delete removes the item and reports whether it existed."""
        keep = store.create(title="keep")
        drop = store.create(title="drop")

        assert store.delete(drop) is True
        assert store.list() == [keep]
        assert store.delete(drop) is False

    def test_no_temp_file_left(self, store):
        store.create()
        assert not store.path.with_suffix(".json.tmp").exists()

    def test_corrupt_file(self, store):
        """Test a corrupt file raises ItemStoreError."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json")
        with pytest.raises(ItemStoreError):
            store.list()

    def test_timezone_aware_sorting(self, store):
        """Test items from different offsets sort by absolute time."""
        utc = Item(title="utc", timestamp=datetime(2026, 1, 1, 12, tzinfo=timezone.utc))
        ahead = Item(
            title="ahead",
            timestamp=datetime(2026, 1, 1, 13, tzinfo=timezone(timedelta(hours=2))),
        )
        store._write_all([utc, ahead])
        assert [item.title for item in store.list()] == ["utc", "ahead"]
