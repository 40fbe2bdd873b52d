from __future__ import annotations

from flask import Flask

from coatings.cache.db import Database
from coatings.cache.migrations import run_migrations
from coatings.cache.repository import ApplicationRepository
from coatings.cache.sqlite import SqliteCacheStore
from coatings.config import CoatingsConfig
from coatings.invalidation import InvalidationTrigger
from coatings.pages.store import MemoryPageStore, PageStore


def create_app(
    pages: PageStore | None = None,
    repository: ApplicationRepository | None = None,
    config: CoatingsConfig | None = None,
) -> Flask:
    """Create and configure the Flask app."""
    app = Flask(__name__)
    config = config or CoatingsConfig()

    if repository is None:
        if pages is None:
            pages = MemoryPageStore(interwiki_prefixes=config.interwiki_prefixes)
        db = Database(":memory:")
        db.connect()
        run_migrations(db)
        app.extensions["db"] = db
        repository = ApplicationRepository(pages, SqliteCacheStore(db), config=config)

    app.extensions["coatings_config"] = config
    app.extensions["repository"] = repository
    app.extensions["trigger"] = InvalidationTrigger(repository)

    from coatings.web.routes.api import api_bp
    from coatings.web.routes.styles import styles_bp

    app.register_blueprint(styles_bp, url_prefix="/styles")
    app.register_blueprint(api_bp, url_prefix="/api")

    return app
