"""Exceptions raised by the persistence layer."""

from __future__ import annotations

from typing import Any, Sequence


class StoreError(Exception):
    """Base class for every store failure."""


class StoreInitializationError(StoreError):
    """The store file could not be opened or the schema could not be created."""


class QueryExecutionError(StoreError):
    """A statement failed; its transaction was rolled back."""

    def __init__(self, message: str, statement: str = "", params: Sequence[Any] = ()):
        super().__init__(message)
        self.statement = statement
        self.params = tuple(params)


class ReferentialIntegrityError(QueryExecutionError):
    """A write referenced a row that does not exist (foreign key violation)."""


class UniqueConstraintError(QueryExecutionError):
    """A write duplicated a value that must be unique (e.g. a user's email)."""
