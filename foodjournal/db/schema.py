"""Table definitions for the journal store.

Statements are run one by one inside a single exclusive transaction, so each
entry holds exactly one statement. There is no versioning: every statement is
create-if-absent.
"""

from __future__ import annotations

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        email TEXT UNIQUE,
        password TEXT
    )""",
    """CREATE TABLE IF NOT EXISTS journals (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        userId INTEGER NOT NULL,
        image TEXT,
        description TEXT,
        date TEXT,
        category TEXT,
        FOREIGN KEY(userId) REFERENCES users(id)
    )""",
)

TABLES: tuple[str, ...] = ("users", "journals")
