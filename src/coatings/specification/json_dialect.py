"""JSON specification dialect.

Syntax example::

    {
        "*": {"coatings": ["Base.css"]},
        "Infobox": {
            "coatings": ["Infobox.less", "Template:Infobox/styles.css"],
            "variables": {"accent": "#36c"},
            "preload": [{"href": "https://example.org/font.woff2", "as": "font",
                         "type": "font/woff2", "crossorigin": true}]
        }
    }

The page is one document: the first ERROR aborts the whole parse.
"""

from __future__ import annotations

import json
from typing import Any

from coatings.model.application import (
    WILDCARD,
    ApplicationSpecification,
    PreloadDirective,
    StyleReference,
)
from coatings.model.diagnostic import Diagnostic
from coatings.pages.accessor import StylePageAccessor
from coatings.specification import rules
from coatings.specification.errors import ValidationError
from coatings.specification.result import ParseResult

__all__ = ["parse_json_specification"]


class _Abort(Exception):
    def __init__(self, diagnostic: Diagnostic) -> None:
        self.diagnostic = diagnostic


def _fail_on(diag: Diagnostic | None, result: ParseResult) -> None:
    """Record *diag*; abort the parse if it is an error."""
    if diag is None:
        return
    result.diagnostics.append(diag)
    if diag.is_error:
        raise _Abort(diag)


def _parse_variables(raw: Any, path: str, result: ParseResult) -> dict[str, str]:
    if not isinstance(raw, dict):
        _fail_on(rules.invalid_type(path, "object"), result)
    variables: dict[str, str] = {}
    for name, value in raw.items():
        if not isinstance(value, str):
            _fail_on(rules.invalid_type(f"{path}.{name}", "string"), result)
        _fail_on(rules.check_variable_name(name, f"{path}.{name}"), result)
        _fail_on(rules.check_variable_value(value, f"{path}.{name}"), result)
        variables[name] = value
    return variables


def _parse_preload(raw: Any, path: str, result: ParseResult) -> tuple[PreloadDirective, ...]:
    if not isinstance(raw, list):
        _fail_on(rules.invalid_type(path, "array"), result)
    directives: list[PreloadDirective] = []
    for index, item in enumerate(raw):
        item_path = f"{path}[{index}]"
        if not isinstance(item, dict):
            _fail_on(rules.invalid_type(item_path, "object"), result)
        directive, diag = rules.build_preload(item, item_path)
        _fail_on(diag, result)
        assert directive is not None
        directives.append(directive)
    return rules.merge_preload(directives)


def _parse_application(
    base: str,
    raw: Any,
    accessor: StylePageAccessor,
    strict: bool,
    result: ParseResult,
) -> ApplicationSpecification | None:
    path = f".{base}"
    if not isinstance(raw, dict):
        _fail_on(rules.invalid_type(path, "object"), result)

    application_id = WILDCARD
    base_page_id = 0
    skip = False
    if base.strip() != WILDCARD:
        lookup = accessor.check_base(base)
        diag = rules.check_base(lookup, path, strict)
        _fail_on(diag, result)
        if diag is not None:
            skip = True
            result.pending_bases.append(lookup.name)
        else:
            assert lookup.title is not None and lookup.page is not None
            application_id = lookup.title.text
            base_page_id = lookup.page.page_id

    if "coatings" not in raw:
        _fail_on(rules.missing_data(f"{path}.coatings", "Missing 'coatings'."), result)
    coatings = raw["coatings"]
    if not isinstance(coatings, list):
        _fail_on(rules.invalid_type(f"{path}.coatings", "array"), result)
    if not coatings:
        _fail_on(
            rules.missing_data(f"{path}.coatings[]", "At least one coating is required."),
            result,
        )

    variables: dict[str, str] = {}
    if "variables" in raw:
        variables = _parse_variables(raw["variables"], f"{path}.variables", result)

    entries: list[StyleReference] = []
    for index, coating in enumerate(coatings):
        coating_path = f"{path}.coatings[{index}]"
        if not isinstance(coating, str):
            _fail_on(rules.invalid_type(coating_path, "string"), result)
        lookup = accessor.check(coating)
        _fail_on(rules.check_coating(lookup, coating_path, strict), result)
        entries.append(StyleReference(page_name=lookup.name, variables=dict(variables)))

    preload: tuple[PreloadDirective, ...] = ()
    if "preload" in raw:
        preload = _parse_preload(raw["preload"], f"{path}.preload", result)

    if skip:
        return None
    return ApplicationSpecification(
        application_id=application_id,
        entries=tuple(entries),
        preload=preload,
        base_page_id=base_page_id,
        variables=variables,
    )


def parse_json_specification(
    text: str,
    accessor: StylePageAccessor,
    strict: bool = False,
) -> ParseResult:
    """Parse a JSON specification document.

    Raises :class:`ValidationError` on the first ERROR. Warnings (only
    produced when ``strict`` is false) are returned on the result.
    """
    result = ParseResult()
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        diag = rules.invalid_type(".", f"a JSON object ({exc.msg} at line {exc.lineno})")
        raise ValidationError([diag]) from exc
    except RecursionError as exc:
        diag = rules.invalid_type(".", "a JSON object (nested too deeply)")
        raise ValidationError([diag]) from exc

    try:
        if not isinstance(data, dict):
            _fail_on(rules.invalid_type(".", "object"), result)
        for base, raw in data.items():
            application = _parse_application(base, raw, accessor, strict, result)
            if application is not None:
                result.applications[application.application_id] = application
    except _Abort:
        raise ValidationError(result.diagnostics) from None
    return result
