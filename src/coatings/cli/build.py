"""CLI commands: coatings build / inspect -- resolve applications from a page directory."""

from __future__ import annotations

import sys

import click

from coatings.cli.common import applications_page_option, open_repository, pages_option
from coatings.config import CoatingsConfig


@click.command()
@pages_option
@applications_page_option
@click.option("--app", "app_id", default=None, help="Only build this application")
def build(pages_dir: str, applications_page: str, app_id: str | None) -> None:
    """Compile every application and print its CSS."""
    config = CoatingsConfig(pages_dir=pages_dir, applications_page=applications_page)
    repository = open_repository(config)

    if app_id is not None:
        bundle = repository.get_application_by_id(app_id)
        if bundle is None:
            click.echo(f"No application {app_id!r}", err=True)
            sys.exit(1)
        bundles = [bundle]
    else:
        bundles = list(repository.get_applications().values())

    if not bundles:
        click.echo("No applications defined", err=True)
        sys.exit(1)

    for bundle in bundles:
        click.echo(f"/* application {bundle.application_id} ({bundle.version_hash()}) */")
        if bundle.css:
            click.echo(bundle.css)
        for page in bundle.unresolved_pages():
            click.echo(f"warning: {page} did not resolve", err=True)


@click.command()
@pages_option
@applications_page_option
def inspect(pages_dir: str, applications_page: str) -> None:
    """Show each application's pages, revisions and preload directives."""
    config = CoatingsConfig(pages_dir=pages_dir, applications_page=applications_page)
    repository = open_repository(config)
    applications = repository.get_applications()

    click.echo(f"Applications: {len(applications)}")
    for bundle in applications.values():
        click.echo()
        click.echo(f"{bundle.application_id}  base_page_id={bundle.base_page_id}")
        for page, revision in bundle.source_revisions.items():
            click.echo(f"  {page}  rev={revision}")
        for directive in bundle.preload:
            click.echo(f"  preload {directive.href} as={directive.as_}")
