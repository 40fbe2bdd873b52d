"""CLI commands: coatings serve / purge -- run the style server, reset its cache."""

from __future__ import annotations

import click

from coatings.cli.common import applications_page_option, open_repository, pages_option
from coatings.config import CoatingsConfig


def _sqlite_store(db_path: str):
    from coatings.cache.db import Database
    from coatings.cache.migrations import run_migrations
    from coatings.cache.sqlite import SqliteCacheStore

    database = Database(db_path)
    database.connect()
    run_migrations(database)
    return database, SqliteCacheStore(database)


@click.command()
@pages_option
@applications_page_option
@click.option("--db", default="coatings.db", help="Cache database path")
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=5000, type=int, help="Port to bind to")
@click.option("--skin", "skins", multiple=True, help="Allowed skin (repeatable; default all)")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
def serve(
    pages_dir: str,
    applications_page: str,
    db: str,
    host: str,
    port: int,
    skins: tuple[str, ...],
    debug: bool,
) -> None:
    """Start the style server."""
    from coatings.web.app import create_app

    config = CoatingsConfig(
        db_path=db,
        pages_dir=pages_dir,
        applications_page=applications_page,
        host=host,
        port=port,
        skins=skins,
    )
    _, store = _sqlite_store(config.db_path)
    app = create_app(repository=open_repository(config, store), config=config)
    click.echo(f"Starting Coatings on {host}:{port}")
    app.run(host=host, port=port, debug=debug)


@click.command()
@pages_option
@click.option("--db", default="coatings.db", help="Cache database path")
def purge(pages_dir: str, db: str) -> None:
    """Invalidate the cached applications for every server sharing DB."""
    config = CoatingsConfig(db_path=db, pages_dir=pages_dir)
    database, store = _sqlite_store(config.db_path)
    generation = open_repository(config, store).invalidate()
    database.close()
    click.echo(f"Cache invalidated (generation {generation})")
