"""Coatings CLI entry point: Click group with subcommands."""

import logging

import click

from coatings import __version__


@click.group()
@click.version_option(version=__version__, prog_name="coatings")
@click.option("-v", "--verbose", is_flag=True, help="Log cache and resolution activity.")
def cli(verbose: bool) -> None:
    """Coatings - compile and serve wiki style sheet applications."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from coatings.cli.build import build, inspect  # noqa: E402
from coatings.cli.serve import purge, serve  # noqa: E402
from coatings.cli.validate import validate  # noqa: E402

cli.add_command(validate)
cli.add_command(build)
cli.add_command(inspect)
cli.add_command(serve)
cli.add_command(purge)
