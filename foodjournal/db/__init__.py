"""Database layer — the journal's local SQLite store."""

from foodjournal.db.connection import Store, Transaction, get_store, init_store
from foodjournal.db.errors import (
    QueryExecutionError,
    ReferentialIntegrityError,
    StoreError,
    StoreInitializationError,
    UniqueConstraintError,
)
from foodjournal.db.result import QueryResult

__all__ = [
    "QueryExecutionError",
    "QueryResult",
    "ReferentialIntegrityError",
    "Store",
    "StoreError",
    "StoreInitializationError",
    "Transaction",
    "UniqueConstraintError",
    "get_store",
    "init_store",
]
