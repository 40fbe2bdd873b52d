from coatings.cache.db import Database
from coatings.cache.migrations import run_migrations
from coatings.cache.repository import SCHEMA_VERSION, ApplicationRepository
from coatings.cache.sqlite import SqliteCacheStore
from coatings.cache.store import CacheStore, MemoryCacheStore

__all__ = [
    "SCHEMA_VERSION",
    "ApplicationRepository",
    "CacheStore",
    "MemoryCacheStore",
    "SqliteCacheStore",
    "Database",
    "run_migrations",
]
