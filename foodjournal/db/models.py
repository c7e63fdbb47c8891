"""Database model helpers — records and query builders for users and journals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from foodjournal.db.connection import Store, Transaction

logger = logging.getLogger(__name__)


@dataclass
class User:
    id: int
    email: str
    password: str | None = None


@dataclass
class JournalEntry:
    id: int
    user_id: int
    image: str | None = None
    description: str | None = None
    date: str | None = None
    category: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> JournalEntry:
        return cls(
            id=row["id"],
            user_id=row["userId"],
            image=row["image"],
            description=row["description"],
            date=row["date"],
            category=row["category"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "image": self.image,
            "description": self.description,
            "date": self.date,
            "category": self.category,
        }


class UserRepository:
    """Database operations for users."""

    def __init__(self, store: Store):
        self.store = store

    def create(self, email: str, password: str | None = None) -> int:
        result = self.store.execute(
            "INSERT INTO users (email, password) VALUES (?, ?)",
            (email, password),
        )
        return result.insert_id

    def get_by_email(self, email: str) -> User | None:
        row = self.store.execute("SELECT * FROM users WHERE email = ?", (email,)).first()
        if row:
            return User(id=row["id"], email=row["email"], password=row["password"])
        return None

    def get_by_id(self, user_id: int) -> User | None:
        row = self.store.execute("SELECT * FROM users WHERE id = ?", (user_id,)).first()
        if row:
            return User(id=row["id"], email=row["email"], password=row["password"])
        return None


class JournalRepository:
    """Database operations for journal entries.

    Updates never touch ``id``, ``userId`` or ``date``.
    """

    def __init__(self, store: Store):
        self.store = store

    def create(
        self,
        user_id: int,
        image: str,
        description: str,
        category: str,
        date: str,
        transaction: Transaction | None = None,
    ) -> int:
        result = self.store.execute(
            "INSERT INTO journals (userId, image, description, category, date) VALUES (?, ?, ?, ?, ?)",
            (user_id, image, description, category, date),
            transaction=transaction,
        )
        logger.info("Created journal entry %s for user %d", result.insert_id, user_id)
        return result.insert_id

    def get(self, entry_id: int) -> JournalEntry | None:
        row = self.store.execute("SELECT * FROM journals WHERE id = ?", (entry_id,)).first()
        return JournalEntry.from_row(row) if row else None

    def list_for_user(self, user_id: int) -> list[JournalEntry]:
        """All entries of a user, newest first."""
        result = self.store.execute(
            "SELECT * FROM journals WHERE userId = ? ORDER BY date DESC",
            (user_id,),
        )
        return [JournalEntry.from_row(r) for r in result.rows]

    def update(self, entry_id: int, image: str, description: str, category: str) -> int:
        """Change the editable fields of an entry. Returns the number of rows updated."""
        result = self.store.execute(
            "UPDATE journals SET image = ?, description = ?, category = ? WHERE id = ?",
            (image, description, category, entry_id),
        )
        return result.rows_affected

    def delete(self, entry_id: int) -> int:
        result = self.store.execute("DELETE FROM journals WHERE id = ?", (entry_id,))
        return result.rows_affected
