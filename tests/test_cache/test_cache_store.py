"""Tests for the cache stores: entries, generations and locks."""

import pytest

from coatings.cache.codec import decode_applications, encode_applications
from coatings.cache.db import Database
from coatings.cache.migrations import run_migrations
from coatings.cache.sqlite import SqliteCacheStore
from coatings.cache.store import MemoryCacheStore
from coatings.model.application import ApplicationBundle, PreloadDirective
from tests.conftest import FakeClock


def open_sqlite(path: str, clock) -> tuple[Database, SqliteCacheStore]:
    db = Database(path)
    db.connect()
    run_migrations(db)
    return db, SqliteCacheStore(db, clock=clock)


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    clock = FakeClock()
    if request.param == "memory":
        yield MemoryCacheStore(clock=clock), clock
    else:
        db, store = open_sqlite(str(tmp_path / "cache.db"), clock)
        yield store, clock
        db.close()


class TestEntries:
    def test_missing(self, store):
        cache, _ = store
        assert cache.get("k") is None

    def test_set_get_delete(self, store):
        cache, _ = store
        cache.set("k", {"a": [1, 2]})
        assert cache.get("k") == {"a": [1, 2]}
        cache.delete("k")
        assert cache.get("k") is None

    def test_values_are_copies(self, store):
        cache, _ = store
        value = {"a": [1]}
        cache.set("k", value)
        value["a"].append(2)
        cache.get("k")["a"].append(3)
        assert cache.get("k") == {"a": [1]}


class TestGenerations:
    def test_starts_at_zero(self, store):
        cache, _ = store
        assert cache.get_generation("check") == 0

    def test_bump_increments(self, store):
        cache, _ = store
        assert cache.bump_generation("check") == 1
        assert cache.bump_generation("check") == 2
        assert cache.get_generation("check") == 2
        assert cache.get_generation("other") == 0


class TestLocks:
    def test_exclusive(self, store):
        cache, _ = store
        owner = cache.acquire_lock("lock", ttl=10)
        assert owner is not None
        assert cache.acquire_lock("lock", ttl=10) is None

    def test_release(self, store):
        cache, _ = store
        owner = cache.acquire_lock("lock", ttl=10)
        cache.release_lock("lock", owner)
        assert cache.acquire_lock("lock", ttl=10) is not None

    def test_expires(self, store):
        cache, clock = store
        stale_owner = cache.acquire_lock("lock", ttl=5)
        clock.advance(6)
        assert cache.acquire_lock("lock", ttl=5) is not None
        # The expired holder cannot release its successor's lock.
        cache.release_lock("lock", stale_owner)
        assert cache.acquire_lock("lock", ttl=5) is None


# ---------------------------------------------------------------------------
# Two connections to one file behave like two processes
# ---------------------------------------------------------------------------


class TestSqliteAcrossConnections:
    def test_lock_and_generation_are_shared(self, tmp_path):
        clock = FakeClock()
        path = str(tmp_path / "shared.db")
        db_a, a = open_sqlite(path, clock)
        db_b, b = open_sqlite(path, clock)
        try:
            owner = a.acquire_lock("lock", ttl=30)
            assert owner is not None
            assert b.acquire_lock("lock", ttl=30) is None
            a.release_lock("lock", owner)
            assert b.acquire_lock("lock", ttl=30) is not None

            b.bump_generation("check")
            assert a.get_generation("check") == 1

            a.set("k", {"v": 1})
            assert b.get("k") == {"v": 1}
        finally:
            db_a.close()
            db_b.close()


class TestCodec:
    def test_round_trip_keeps_order_and_fields(self):
        applications = {
            "Infobox": ApplicationBundle(
                application_id="Infobox",
                compiled_styles=(".a{}", ""),
                source_revisions={"Style:A.css": "4", "Style:Later.css": "0"},
                variables=({"application-id": '"Infobox"'}, {}),
                preload=(PreloadDirective("/f.woff2", "font", crossorigin="anonymous"),),
                base_page_id=9,
            ),
            "*": ApplicationBundle("*", ("b{}",), {"Style:B.css": "2"}),
        }
        assert decode_applications(encode_applications(applications)) == applications
        assert list(decode_applications(encode_applications(applications))) == ["Infobox", "*"]
