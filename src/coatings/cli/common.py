"""Options and wiring shared by the CLI commands."""

from __future__ import annotations

import click

from coatings.cache.repository import ApplicationRepository
from coatings.cache.store import CacheStore, MemoryCacheStore
from coatings.config import CoatingsConfig
from coatings.pages.directory import DirectoryPageStore

pages_option = click.option(
    "--pages",
    "pages_dir",
    default="pages",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory holding the wiki pages",
)

applications_page_option = click.option(
    "--applications-page",
    default=CoatingsConfig.applications_page,
    show_default=True,
    help="Title of the page that defines the applications",
)


def directory_store(config: CoatingsConfig) -> DirectoryPageStore:
    return DirectoryPageStore(
        config.pages_dir,
        interwiki_prefixes=config.interwiki_prefixes,
        template_css_model=config.template_css_model,
    )


def open_repository(
    config: CoatingsConfig, store: CacheStore | None = None
) -> ApplicationRepository:
    """Repository over the configured page directory.

    Without a *store* the cache lives only as long as the command.
    """
    return ApplicationRepository(
        directory_store(config), store or MemoryCacheStore(), config=config
    )
