"""Specification parser: picks the dialect for a page and runs it."""

from __future__ import annotations

from enum import StrEnum

from coatings.model.diagnostic import Diagnostic
from coatings.model.page import ContentModel
from coatings.pages.accessor import StylePageAccessor
from coatings.specification import rules
from coatings.specification.errors import ValidationError
from coatings.specification.json_dialect import parse_json_specification
from coatings.specification.result import ParseResult
from coatings.specification.wikitext_dialect import parse_wikitext_specification


class Dialect(StrEnum):
    JSON = "json"
    WIKITEXT = "wikitext"


_DIALECTS: dict[ContentModel, Dialect] = {
    ContentModel.APPLICATION_LIST: Dialect.JSON,
    ContentModel.JSON: Dialect.JSON,
    ContentModel.WIKITEXT: Dialect.WIKITEXT,
}


def dialect_for(content_model: ContentModel | str) -> Dialect | None:
    """Return the dialect for a content model, or None if it is unsupported."""
    try:
        return _DIALECTS.get(ContentModel(content_model))
    except ValueError:
        return None


def parse_specification(
    text: str,
    dialect: Dialect,
    accessor: StylePageAccessor,
    strict: bool = False,
) -> ParseResult:
    """Parse *text* in *dialect* into application specifications.

    The JSON dialect raises :class:`ValidationError` on its first error in
    either mode. The wikitext dialect raises only when ``strict`` is set.
    """
    if dialect is Dialect.JSON:
        return parse_json_specification(text, accessor, strict=strict)
    return parse_wikitext_specification(text, accessor, strict=strict)


def parse_specification_or_raise(
    text: str,
    dialect: Dialect,
    accessor: StylePageAccessor,
    strict: bool = False,
) -> ParseResult:
    """Like :func:`parse_specification` but raises if any ERROR was recorded."""
    result = parse_specification(text, dialect, accessor, strict=strict)
    if result.errors:
        raise ValidationError(result.diagnostics)
    return result


def validate_save(
    text: str,
    content_model: ContentModel | str,
    accessor: StylePageAccessor,
) -> list[Diagnostic]:
    """Save-time validation: strict parse, returning every diagnostic.

    An empty list means the edit may be saved.
    """
    dialect = dialect_for(content_model)
    if dialect is None:
        return [rules.invalid_type(".", "a JSON or wikitext specification")]
    try:
        result = parse_specification(text, dialect, accessor, strict=True)
    except ValidationError as exc:
        return exc.diagnostics
    return result.diagnostics
