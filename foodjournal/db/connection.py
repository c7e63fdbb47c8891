"""Store lifecycle and transactional statement execution over SQLite."""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Sequence

from foodjournal.config import AppConfig
from foodjournal.db.errors import (
    QueryExecutionError,
    ReferentialIntegrityError,
    StoreInitializationError,
    UniqueConstraintError,
)
from foodjournal.db.result import QueryResult
from foodjournal.db.schema import SCHEMA_STATEMENTS

logger = logging.getLogger(__name__)


def _wrap_error(error: sqlite3.Error, statement: str, params: Sequence[Any]) -> QueryExecutionError:
    message = str(error)
    if isinstance(error, sqlite3.IntegrityError) and "FOREIGN KEY" in message.upper():
        return ReferentialIntegrityError(message, statement, params)
    if isinstance(error, sqlite3.IntegrityError) and "UNIQUE" in message.upper():
        return UniqueConstraintError(message, statement, params)
    return QueryExecutionError(message, statement, params)


class Transaction:
    """An open exclusive transaction on the store's handle.

    Only usable inside the ``Store.transaction()`` block that created it.
    """

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn
        self.active = True

    def execute(self, statement: str, params: Sequence[Any] = ()) -> QueryResult:
        """Run one statement inside this transaction and normalize its result."""
        if not self.active:
            raise QueryExecutionError("Transaction is no longer active", statement, params)

        logger.debug("Executing: %s %r", statement, params)
        try:
            changes_before = self._conn.total_changes
            cursor = self._conn.execute(statement, tuple(params))
            return QueryResult.from_cursor(statement, cursor, changes_before)
        except sqlite3.Error as e:
            logger.error("SQL execution error: %s", e)
            raise _wrap_error(e, statement, params) from e


class Store:
    """The journal's single SQLite store.

    The handle is opened lazily by the first ``ensure_ready()`` (or ``execute``)
    and reused until ``close()``. Every statement runs inside an exclusive
    transaction; callers never see the raw connection.
    """

    def __init__(self, config: AppConfig):
        self.config = config.database
        self._conn: sqlite3.Connection | None = None
        self._closed = False
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return Path(self.config.sqlite_path)

    @property
    def is_ready(self) -> bool:
        return self._conn is not None and not self._closed

    @property
    def is_closed(self) -> bool:
        return self._closed

    def ensure_ready(self) -> sqlite3.Connection:
        """Open the store and create the schema on first use; return the shared handle."""
        if self.is_ready:
            return self._conn
        with self._lock:
            if self._closed:
                raise StoreInitializationError(f"Store at {self.path} has been closed")
            if self._conn is None:
                self._conn = self._open()
        return self._conn

    def _open(self) -> sqlite3.Connection:
        conn: sqlite3.Connection | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(
                str(self.path),
                timeout=self.config.busy_timeout_seconds,
                check_same_thread=False,
                isolation_level=None,
            )
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys=ON")
            mode = conn.execute("PRAGMA journal_mode=WAL").fetchone()[0]

            conn.execute("BEGIN EXCLUSIVE")
            try:
                for statement in SCHEMA_STATEMENTS:
                    conn.execute(statement)
                conn.execute("COMMIT")
            except sqlite3.Error:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
        except (sqlite3.Error, OSError) as e:
            if conn is not None:
                conn.close()
            logger.error("Database initialization error: %s", e)
            raise StoreInitializationError(f"Could not initialize store at {self.path}: {e}") from e

        logger.info("Database initialized at %s (journal_mode=%s)", self.path, mode)
        return conn

    @contextmanager
    def transaction(self) -> Generator[Transaction, None, None]:
        """Hold one exclusive transaction for several statements.

        Commits when the block exits normally and rolls back if it raises.
        """
        if self._closed:
            raise QueryExecutionError(f"Store at {self.path} has been closed", "BEGIN EXCLUSIVE")
        conn = self.ensure_ready()
        with self._lock:
            try:
                conn.execute("BEGIN EXCLUSIVE")
            except sqlite3.Error as e:
                logger.error("Could not begin transaction: %s", e)
                raise _wrap_error(e, "BEGIN EXCLUSIVE", ()) from e

            tx = Transaction(conn)
            try:
                yield tx
            except BaseException:
                tx.active = False
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise

            tx.active = False
            try:
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                logger.error("Commit failed: %s", e)
                raise _wrap_error(e, "COMMIT", ()) from e

    def execute(
        self,
        statement: str,
        params: Sequence[Any] = (),
        *,
        transaction: Transaction | None = None,
    ) -> QueryResult:
        """Run one statement and return its normalized result.

        Without ``transaction`` the statement gets its own exclusive transaction;
        pass one from ``transaction()`` to join a wider unit of work.
        """
        if transaction is not None:
            return transaction.execute(statement, params)
        with self.transaction() as tx:
            return tx.execute(statement, params)

    def close(self) -> None:
        """Close the handle. Later statements fail instead of reopening the file."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._conn is not None:
                self._conn.close()
                logger.info("Database closed: %s", self.path)


# Module-level instance for request handlers, owned by create_app()
_store: Store | None = None


def get_store() -> Store:
    """Get the application's store."""
    if _store is None:
        raise RuntimeError("Store not initialized. Call init_store() first.")
    return _store


def init_store(config: AppConfig) -> Store:
    """Create the application's store and open it."""
    global _store
    _store = Store(config)
    _store.ensure_ready()
    return _store
