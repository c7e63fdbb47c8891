"""Normalized statement results."""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass, field
from typing import Any

_INSERT_VERBS = ("INSERT", "REPLACE")
_MAIN_VERBS = ("INSERT", "REPLACE", "UPDATE", "DELETE", "SELECT", "VALUES")

# String literals, quoted identifiers, comments, parentheses and words
_TOKEN = re.compile(
    r"'(?:[^']|'')*'|\"(?:[^\"]|\"\")*\"|`[^`]*`|\[[^\]]*\]|--[^\n]*|/\*.*?\*/|[()]|\w+",
    re.DOTALL,
)


@dataclass
class QueryResult:
    """One result shape for every statement kind.

    ``rows`` is always a list (empty for writes), ``insert_id`` is only set when
    an insert created exactly one row, and ``rows_affected`` is never negative.
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    insert_id: int | None = None
    rows_affected: int = 0

    def first(self) -> dict[str, Any] | None:
        return self.rows[0] if self.rows else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": self.rows,
            "insertId": self.insert_id,
            "rowsAffected": self.rows_affected,
        }

    @classmethod
    def from_cursor(cls, statement: str, cursor: sqlite3.Cursor, changes_before: int) -> QueryResult:
        """Build a result from a cursor that has just executed ``statement``.

        ``changes_before`` is the connection's ``total_changes`` taken right
        before the statement ran. The delta is used instead of
        ``cursor.rowcount``, which stays -1 for writes that start with ``WITH``.
        """
        rows: list[dict[str, Any]] = []
        if cursor.description:
            columns = [d[0] for d in cursor.description]
            rows = [dict(zip(columns, row)) for row in cursor.fetchall()]

        # RETURNING rows must be fetched before the change count is final
        rows_affected = max(cursor.connection.total_changes - changes_before, 0)

        insert_id = None
        if main_verb(statement) in _INSERT_VERBS and rows_affected == 1:
            insert_id = cursor.lastrowid

        return cls(rows=rows, insert_id=insert_id, rows_affected=rows_affected)


def main_verb(statement: str) -> str | None:
    """The statement's top-level verb, skipping any ``WITH`` clause."""
    depth = 0
    for match in _TOKEN.finditer(statement):
        token = match.group()
        if token == "(":
            depth += 1
        elif token == ")":
            depth -= 1
        elif depth == 0 and token.upper() in _MAIN_VERBS:
            return token.upper()
    return None
