"""Journal service — form rules for saving, editing, listing and filtering entries."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from foodjournal.config import ALL_CATEGORIES, JournalConfig
from foodjournal.db.connection import Store
from foodjournal.db.models import JournalEntry, JournalRepository

logger = logging.getLogger(__name__)


class JournalValidationError(ValueError):
    """An entry was submitted without the fields it needs."""


class JournalEntryNotFound(LookupError):
    """No journal entry with the requested id belongs to the user."""


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def filter_by_category(entries: list[JournalEntry], category: str | None) -> list[JournalEntry]:
    """Filter already-loaded entries. ``All`` (or no category) keeps everything."""
    if not category or category == ALL_CATEGORIES:
        return list(entries)
    return [e for e in entries if e.category == category]


class JournalService:
    """Create, update, delete and browse a user's journal entries."""

    def __init__(self, store: Store, config: JournalConfig | None = None):
        self.repo = JournalRepository(store)
        self.config = config or JournalConfig()

    @property
    def categories(self) -> list[str]:
        """Choices offered to the user, with the ``All`` filter first."""
        return [ALL_CATEGORIES, *self.config.categories]

    def _validate(self, image: str | None, description: str | None, category: str | None) -> tuple[str, str, str]:
        if not image or not description or not description.strip():
            raise JournalValidationError("Please add both an image and description")
        category = category or self.config.default_category
        if category not in self.categories:
            raise JournalValidationError(f"Unknown category: {category}")
        return image, description.strip(), category

    def load(self, user_id: int, category: str | None = None) -> list[JournalEntry]:
        entries = self.repo.list_for_user(user_id)
        return filter_by_category(entries, category)

    def get(self, user_id: int, entry_id: int) -> JournalEntry:
        entry = self.repo.get(entry_id)
        if entry is None or entry.user_id != user_id:
            raise JournalEntryNotFound(f"Journal entry {entry_id} not found")
        return entry

    def save(
        self,
        user_id: int,
        image: str | None,
        description: str | None,
        category: str | None = None,
        entry_id: int | None = None,
    ) -> JournalEntry:
        """Create a new entry, or update ``entry_id`` when editing."""
        image, description, category = self._validate(image, description, category)

        if entry_id is not None:
            self.get(user_id, entry_id)
            self.repo.update(entry_id, image, description, category)
            logger.info("Updated journal entry %d for user %d", entry_id, user_id)
            return self.get(user_id, entry_id)

        new_id = self.repo.create(user_id, image, description, category, utc_now_iso())
        return self.get(user_id, new_id)

    def delete(self, user_id: int, entry_id: int) -> None:
        self.get(user_id, entry_id)
        self.repo.delete(entry_id)
        logger.info("Deleted journal entry %d for user %d", entry_id, user_id)
