"""Journal entry rules on top of the store."""

from foodjournal.journal.service import (
    JournalEntryNotFound,
    JournalService,
    JournalValidationError,
    filter_by_category,
)

__all__ = [
    "JournalEntryNotFound",
    "JournalService",
    "JournalValidationError",
    "filter_by_category",
]
