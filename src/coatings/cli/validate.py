"""CLI command: coatings validate -- check an applications page before saving it."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from coatings.cli.common import directory_store, pages_option
from coatings.config import CoatingsConfig
from coatings.model.diagnostic import Severity
from coatings.model.page import ContentModel
from coatings.pages.accessor import StylePageAccessor
from coatings.specification.parser import validate_save


def _guess_model(path: Path) -> ContentModel:
    if path.suffix.lower() == ".json":
        return ContentModel.APPLICATION_LIST
    return ContentModel.WIKITEXT


@click.command()
@click.argument("specfile", type=click.Path(exists=True, dir_okay=False))
@pages_option
@click.option(
    "--model",
    type=click.Choice([m.value for m in ContentModel]),
    default=None,
    help="Content model of the page (guessed from the file suffix by default)",
)
def validate(specfile: str, pages_dir: str, model: str | None) -> None:
    """Validate an applications page against the pages it references.

    Prints diagnostics and exits with code 0 if no errors are found, or
    code 1 if there are errors.
    """
    path = Path(specfile)
    config = CoatingsConfig(pages_dir=pages_dir)
    accessor = StylePageAccessor(directory_store(config))

    text = path.read_text(encoding="utf-8")
    diagnostics = validate_save(text, model or _guess_model(path), accessor)

    if not diagnostics:
        click.echo(f"OK: {path.name} is valid (0 diagnostics)")
        sys.exit(0)

    errors = [d for d in diagnostics if d.severity is Severity.ERROR]
    warnings = [d for d in diagnostics if d.severity is Severity.WARNING]

    for diag in diagnostics:
        click.echo(str(diag))
        if diag.fix:
            click.echo(f"  fix: {diag.fix}")

    click.echo()
    click.echo(f"Summary: {len(errors)} error(s), {len(warnings)} warning(s)")

    if errors:
        sys.exit(1)
    sys.exit(0)
