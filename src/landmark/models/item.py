"""Locally persisted item model."""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Item(BaseModel):
    """A user-created item with a creation timestamp."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    timestamp: datetime = Field(default_factory=_now)
    title: str = "New Item"
    content: str | None = None

    @property
    def display_title(self) -> str:
        return self.title or "Untitled"

    @property
    def formatted_date(self) -> str:
        """Abbreviated date with short time, e.g. ``Oct 18, 2026 at 2:05 PM``."""
        local = self.timestamp.astimezone()
        hour = local.hour % 12 or 12
        return f"{local:%b} {local.day}, {local.year} at {hour}:{local:%M %p}"
