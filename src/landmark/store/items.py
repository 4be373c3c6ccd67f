"""JSON file backed item store."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from landmark.exceptions import ItemStoreError
from landmark.models.item import Item

if TYPE_CHECKING:
    import os

logger = logging.getLogger(__name__)

_ITEMS = TypeAdapter(list[Item])


class ItemStore:
    """Item store persisted as a JSON array in a single file.

    Timestamps are stored as ISO-8601 strings. Writes go to a temp file
    that is renamed into place.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def create(self, title: str = "New Item", content: str | None = None) -> Item:
        """Create and persist a new item."""
        item = Item(title=title, content=content)
        items = self._read_all()
        items.append(item)
        self._write_all(items)
        logger.info(f"Created item {item.id}")
        return item

    def list(self) -> list[Item]:
        """All items, newest first."""
        return sorted(self._read_all(), key=lambda item: item.timestamp, reverse=True)

    def get(self, item_id: uuid.UUID | str) -> Item | None:
        """Look up an item by id."""
        item_id = uuid.UUID(str(item_id))
        for item in self._read_all():
            if item.id == item_id:
                return item
        return None

    def delete(self, item: Item) -> bool:
        """Remove an item.

        Returns:
            True if the item existed.
        """
        items = self._read_all()
        remaining = [existing for existing in items if existing.id != item.id]
        if len(remaining) == len(items):
            return False
        self._write_all(remaining)
        logger.info(f"Deleted item {item.id}")
        return True

    def _read_all(self) -> list[Item]:
        if not self._path.exists():
            return []
        try:
            return _ITEMS.validate_json(self._path.read_bytes())
        except ValidationError as e:
            raise ItemStoreError(f"Corrupt item store {self._path}: {e}") from e

    def _write_all(self, items: list[Item]) -> None:
        """Persist items atomically via temp file rename."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_bytes(_ITEMS.dump_json(items, indent=2))
        tmp.replace(self._path)
