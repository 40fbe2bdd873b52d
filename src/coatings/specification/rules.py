"""Validation rules shared by every specification dialect.

Each rule inspects one piece of the specification and returns a
:class:`Diagnostic` describing the problem, or ``None`` when the piece is
valid. Dialects decide what an ERROR means for them (abort the document or
skip the application).
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from urllib.parse import urlsplit

from coatings.model.application import PreloadDirective
from coatings.model.diagnostic import Diagnostic, ErrorKind, Severity
from coatings.pages.accessor import Lookup

# ---------------------------------------------------------------------------
# Known value sets
# ---------------------------------------------------------------------------

VARIABLE_NAME_RE = re.compile(r"^[a-z0-9,\s-]+$")

# Sequences that would let a value escape its declaration.
FORBIDDEN_VALUE_TOKENS = (";", "/*", "*/")

PRELOAD_FIELDS = ("href", "as", "type", "media", "crossorigin")

_URL_UNSAFE_RE = re.compile(r"[^A-Za-z0-9$\-_.+!*'(),{}|\\^~\[\]`<>#%\";/?:@&=]")
_HEADER_UNSAFE = frozenset('<>"\\`')
_URL_SCHEMES = frozenset({"http", "https"})

_FALSY_STRINGS = frozenset({"", "0", "false", "no", "off"})


def _page_state_severity(strict: bool) -> Severity:
    return Severity.ERROR if strict else Severity.WARNING


# ---------------------------------------------------------------------------
# Page references
# ---------------------------------------------------------------------------


def check_base(lookup: Lookup, path: str, strict: bool) -> Diagnostic | None:
    """The base must be an existing, local page in the Template namespace."""
    if lookup.ok:
        return None
    severity = Severity.ERROR
    if not strict and not lookup.failure.is_permanent:
        severity = Severity.WARNING
    return Diagnostic(
        rule="check_base",
        severity=severity,
        kind=ErrorKind.INVALID_BASE,
        message=f"Base '{lookup.name}' is not a usable template ({lookup.failure.value}).",
        path=path,
        fix="Name an existing template, or use '*' for the catch-all application.",
    )


def check_coating(lookup: Lookup, path: str, strict: bool) -> Diagnostic | None:
    """A coating must be a local Less or CSS page in the Style or Template namespace.

    Malformed, external and wrong-namespace references are always errors.
    Missing pages and pages with another content model are errors only in
    strict mode; otherwise they are warnings and the entry is kept so it can
    be tracked until the page becomes usable.
    """
    if lookup.ok:
        return None
    severity = Severity.ERROR if lookup.failure.is_permanent else _page_state_severity(strict)
    return Diagnostic(
        rule="check_coating",
        severity=severity,
        kind=ErrorKind.INVALID_COATING,
        message=f"Coating '{lookup.name}' is not a usable style page ({lookup.failure.value}).",
        path=path,
        fix="Reference an existing Less or CSS page in the Style or Template namespace.",
    )


# ---------------------------------------------------------------------------
# Variables
# ---------------------------------------------------------------------------


def check_variable_name(name: str, path: str) -> Diagnostic | None:
    if VARIABLE_NAME_RE.match(name) and not name.startswith("--"):
        return None
    return Diagnostic(
        rule="check_variable_name",
        severity=Severity.ERROR,
        kind=ErrorKind.INVALID_VARIABLE_NAME,
        message=f"Invalid variable name '{name}'.",
        path=path,
        fix="Use lowercase letters, digits and hyphens, not starting with '--'.",
    )


def check_variable_value(value: str, path: str) -> Diagnostic | None:
    for token in FORBIDDEN_VALUE_TOKENS:
        if token in value:
            return Diagnostic(
                rule="check_variable_value",
                severity=Severity.ERROR,
                kind=ErrorKind.INVALID_VARIABLE_VALUE,
                message=f"Variable value '{value}' must not contain '{token}'.",
                path=path,
                fix="Remove ';', '/*' and '*/' from the value.",
            )
    return None


def check_variables(variables: Mapping[str, str], path: str) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for name, value in variables.items():
        diag = check_variable_name(name, f"{path}.{name}")
        if diag is None:
            diag = check_variable_value(value, f"{path}.{name}")
        if diag is not None:
            diagnostics.append(diag)
    return diagnostics


# ---------------------------------------------------------------------------
# Preload directives
# ---------------------------------------------------------------------------


def sanitize_href(href: str) -> str:
    """Drop every character that cannot appear in a URL."""
    return _URL_UNSAFE_RE.sub("", href)


def is_valid_href(href: str) -> bool:
    """Accept http(s) URLs, protocol-relative URLs and explicit relative paths."""
    if not href or any(ch in _HEADER_UNSAFE for ch in href):
        return False
    try:
        parts = urlsplit(href)
    except ValueError:
        return False
    if parts.scheme:
        return parts.scheme.lower() in _URL_SCHEMES and bool(parts.netloc)
    if href.startswith("//"):
        return bool(parts.netloc)
    return href.startswith(("/", "./", "../"))


def check_preload_href(href: str, path: str) -> Diagnostic | None:
    if is_valid_href(href):
        return None
    return Diagnostic(
        rule="check_preload_href",
        severity=Severity.ERROR,
        kind=ErrorKind.INVALID_PRELOAD_HREF,
        message=f"Preload href '{href}' is not a valid URL.",
        path=path,
        fix="Use an http(s) URL or a path starting with '/'.",
    )


def _missing(path: str, what: str) -> Diagnostic:
    return Diagnostic(
        rule="check_preload",
        severity=Severity.ERROR,
        kind=ErrorKind.MISSING_DATA,
        message=f"Preload directive is missing '{what}'.",
        path=path,
    )


def _truthy(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSY_STRINGS
    return bool(value)


def build_preload(
    fields: Mapping[str, object], path: str
) -> tuple[PreloadDirective | None, Diagnostic | None]:
    """Build a directive from raw fields, or report the first problem."""
    if "href" not in fields:
        return None, _missing(f"{path}.href", "href")
    raw_href = fields["href"]
    if not isinstance(raw_href, str):
        return None, invalid_type(f"{path}.href", "string")
    href = sanitize_href(raw_href)
    diag = check_preload_href(href, f"{path}.href")
    if diag is not None:
        return None, diag
    if "as" not in fields:
        return None, _missing(f"{path}.as", "as")
    for key in ("as", "type", "media"):
        if key in fields and not isinstance(fields[key], str):
            return None, invalid_type(f"{path}.{key}", "string")

    crossorigin = "anonymous" if _truthy(fields.get("crossorigin", False)) else None
    directive = PreloadDirective(
        href=href,
        as_=str(fields["as"]),
        type=fields.get("type"),  # type: ignore[arg-type]
        media=fields.get("media"),  # type: ignore[arg-type]
        crossorigin=crossorigin,
    )
    return directive, None


def merge_preload(directives: Iterable[PreloadDirective]) -> tuple[PreloadDirective, ...]:
    """Collapse directives sharing an href.

    The merged directive sits where the href first appeared and is the last
    directive given for it (whole-directive replacement).
    """
    merged: dict[str, PreloadDirective] = {}
    for directive in directives:
        merged[directive.href] = directive
    return tuple(merged.values())


# ---------------------------------------------------------------------------
# Shape checks
# ---------------------------------------------------------------------------


def invalid_type(path: str, expected: str) -> Diagnostic:
    return Diagnostic(
        rule="check_data_type",
        severity=Severity.ERROR,
        kind=ErrorKind.INVALID_DATA_TYPE,
        message=f"Expected {expected}.",
        path=path,
    )


def missing_data(path: str, message: str) -> Diagnostic:
    return Diagnostic(
        rule="check_missing_data",
        severity=Severity.ERROR,
        kind=ErrorKind.MISSING_DATA,
        message=message,
        path=path,
    )
