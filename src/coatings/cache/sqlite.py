"""SQLite-backed cache store shared by every process using the same file."""

from __future__ import annotations

import json
import time
import uuid
from typing import Any, Callable

from coatings.cache.db import Database


class SqliteCacheStore:
    """:class:`~coatings.cache.store.CacheStore` over a WAL-mode SQLite file.

    Entries are replaced whole with ``INSERT OR REPLACE``; generations are
    bumped with an upsert inside an immediate transaction; locks are rows
    inserted with ``INSERT OR IGNORE`` so exactly one process wins them.
    """

    def __init__(self, db: Database, clock: Callable[[], float] = time.time) -> None:
        self._db = db
        self._clock = clock

    def get(self, key: str) -> dict[str, Any] | None:
        row = self._db.fetch_one("SELECT value FROM cache_entries WHERE key = ?", (key,))
        if row is None:
            return None
        return json.loads(row["value"])

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._db.execute(
            "INSERT OR REPLACE INTO cache_entries (key, value, updated_at) VALUES (?, ?, ?)",
            (key, json.dumps(value), self._clock()),
        )

    def delete(self, key: str) -> None:
        self._db.execute("DELETE FROM cache_entries WHERE key = ?", (key,))

    def get_generation(self, key: str) -> int:
        row = self._db.fetch_one(
            "SELECT generation FROM cache_generations WHERE key = ?", (key,)
        )
        return row["generation"] if row is not None else 0

    def bump_generation(self, key: str) -> int:
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO cache_generations (key, generation) VALUES (?, 1)
                   ON CONFLICT(key) DO UPDATE SET generation = generation + 1""",
                (key,),
            )
            row = conn.execute(
                "SELECT generation FROM cache_generations WHERE key = ?", (key,)
            ).fetchone()
        return row["generation"]

    def acquire_lock(self, key: str, ttl: float) -> str | None:
        now = self._clock()
        owner = uuid.uuid4().hex
        with self._db.transaction() as conn:
            conn.execute(
                "DELETE FROM cache_locks WHERE key = ? AND expires_at <= ?", (key, now)
            )
            cursor = conn.execute(
                "INSERT OR IGNORE INTO cache_locks (key, owner, expires_at) VALUES (?, ?, ?)",
                (key, owner, now + ttl),
            )
            acquired = cursor.rowcount == 1
        return owner if acquired else None

    def release_lock(self, key: str, owner: str) -> None:
        self._db.execute("DELETE FROM cache_locks WHERE key = ? AND owner = ?", (key, owner))
