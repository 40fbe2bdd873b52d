from __future__ import annotations

import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager


class Database:
    """SQLite database wrapper with WAL mode for cross-process access.

    One connection is shared by every thread of the process; statements are
    serialised through a re-entrant lock. Other processes coordinate through
    SQLite's own file locking, waiting up to ``busy_timeout`` seconds.
    """

    def __init__(self, path: str = ":memory:", busy_timeout: float = 5.0) -> None:
        self._path = path
        self._busy_timeout = busy_timeout
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    @property
    def path(self) -> str:
        return self._path

    def connect(self) -> None:
        """Open connection and enable WAL mode."""
        self._conn = sqlite3.connect(
            self._path,
            timeout=self._busy_timeout,
            check_same_thread=False,
            isolation_level=None,
        )
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Execute a single SQL statement."""
        assert self._conn is not None, "Database not connected"
        with self._lock:
            return self._conn.execute(sql, params)

    def fetch_one(self, sql: str, params: tuple = ()) -> sqlite3.Row | None:
        """Execute a query and return the first row, or None."""
        with self._lock:
            cursor = self.execute(sql, params)
            return cursor.fetchone()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run statements in one immediate (write-locked) transaction."""
        assert self._conn is not None, "Database not connected"
        with self._lock:
            self._conn.execute("BEGIN IMMEDIATE")
            try:
                yield self._conn
            except BaseException:
                self._conn.execute("ROLLBACK")
                raise
            self._conn.execute("COMMIT")

    @property
    def connection(self) -> sqlite3.Connection:
        """Return the underlying connection."""
        assert self._conn is not None, "Database not connected"
        return self._conn
