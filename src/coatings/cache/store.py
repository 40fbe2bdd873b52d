"""Cache store contract and an in-process implementation.

A store holds three kinds of state, all keyed by string:

* entries: whole JSON-able values, replaced atomically and never patched;
* generations: integer check keys that only ever increase;
* locks: short advisory locks that expire on their own.
"""

from __future__ import annotations

import json
import threading
import time
import uuid
from typing import Any, Callable, Protocol


class CacheStore(Protocol):
    """Shared storage behind the application cache."""

    def get(self, key: str) -> dict[str, Any] | None:
        """Return the value stored under *key*, or None."""
        ...

    def set(self, key: str, value: dict[str, Any]) -> None:
        """Replace the value stored under *key*."""
        ...

    def delete(self, key: str) -> None: ...

    def get_generation(self, key: str) -> int:
        """Return the generation of check key *key* (0 if never bumped)."""
        ...

    def bump_generation(self, key: str) -> int:
        """Atomically increment the generation of *key* and return it."""
        ...

    def acquire_lock(self, key: str, ttl: float) -> str | None:
        """Try once to take the lock on *key*.

        Returns an owner token on success, or None if another owner holds an
        unexpired lock.
        """
        ...

    def release_lock(self, key: str, owner: str) -> None:
        """Release the lock on *key* if *owner* still holds it."""
        ...


class MemoryCacheStore:
    """Thread-safe store for a single process.

    Values are kept JSON-encoded so callers never share mutable state with
    the store, as with an external cache.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, str] = {}
        self._generations: dict[str, int] = {}
        self._locks: dict[str, tuple[str, float]] = {}
        self._mutex = threading.Lock()

    def get(self, key: str) -> dict[str, Any] | None:
        with self._mutex:
            raw = self._entries.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: dict[str, Any]) -> None:
        raw = json.dumps(value)
        with self._mutex:
            self._entries[key] = raw

    def delete(self, key: str) -> None:
        with self._mutex:
            self._entries.pop(key, None)

    def get_generation(self, key: str) -> int:
        with self._mutex:
            return self._generations.get(key, 0)

    def bump_generation(self, key: str) -> int:
        with self._mutex:
            generation = self._generations.get(key, 0) + 1
            self._generations[key] = generation
            return generation

    def acquire_lock(self, key: str, ttl: float) -> str | None:
        now = self._clock()
        with self._mutex:
            held = self._locks.get(key)
            if held is not None and held[1] > now:
                return None
            owner = uuid.uuid4().hex
            self._locks[key] = (owner, now + ttl)
            return owner

    def release_lock(self, key: str, owner: str) -> None:
        with self._mutex:
            held = self._locks.get(key)
            if held is not None and held[0] == owner:
                del self._locks[key]
