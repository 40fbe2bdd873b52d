"""Sectioned wikitext specification dialect.

Syntax example::

    == * ==
    === Base.css ===

    == Infobox ==
    === Infobox.less ===
    ; accent: #36c
    ; radius: 4px
    === __preload ===
    ; href: https://example.org/font.woff2
    ; as: font
    ; type: font/woff2
    ; crossorigin: true

Level-2 headings open an application, level-3 headings open a coating (or a
preload directive when the heading starts with ``__preload``), and ``;``
lines carry ``key: value`` pairs for the section above them. Anything else
is ordinary wikitext and is ignored.

Applications are independent: an error skips the section or application it
belongs to and scanning continues, unless ``strict`` is set.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

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

__all__ = ["parse_wikitext_specification", "PRELOAD_SECTION_PREFIX"]

logger = logging.getLogger(__name__)

PRELOAD_SECTION_PREFIX = "__preload"

# == application ==
_APPLICATION_RE = re.compile(r"^==(?!=)\s*(?P<id>[^=]+?)\s*==\s*$")

# === section ===
_SECTION_RE = re.compile(r"^===(?!=)\s*(?P<title>[^=]+?)\s*===\s*$")

# ; key: value
_FIELD_RE = re.compile(
    r"""
    ^;\s*
    (?P<key>[^:]+?)      # key, up to the first colon
    \s*:\s*
    (?P<value>.*?)       # value, may itself contain colons
    \s*$
    """,
    re.VERBOSE,
)


@dataclass
class _Section:
    title: str
    fields: list[tuple[str, str]] = field(default_factory=list)

    @property
    def is_preload(self) -> bool:
        return self.title.startswith(PRELOAD_SECTION_PREFIX)


@dataclass
class _Application:
    identifier: str
    sections: list[_Section] = field(default_factory=list)


def _scan(text: str) -> list[_Application]:
    """Group the page's lines into applications and sections."""
    applications: list[_Application] = []
    current_app: _Application | None = None
    current_section: _Section | None = None
    for line in text.splitlines():
        match = _SECTION_RE.match(line)
        if match:
            if current_app is not None:
                current_section = _Section(title=match.group("title"))
                current_app.sections.append(current_section)
            continue
        match = _APPLICATION_RE.match(line)
        if match:
            current_app = _Application(identifier=match.group("id"))
            applications.append(current_app)
            current_section = None
            continue
        match = _FIELD_RE.match(line)
        if match and current_section is not None:
            current_section.fields.append((match.group("key"), match.group("value")))
    return applications


class _Parser:
    def __init__(self, accessor: StylePageAccessor, strict: bool) -> None:
        self.accessor = accessor
        self.strict = strict
        self.result = ParseResult()

    def report(self, diag: Diagnostic | None) -> bool:
        """Record *diag*; return True when it is an error."""
        if diag is None:
            return False
        self.result.diagnostics.append(diag)
        if diag.is_error:
            if self.strict:
                raise ValidationError(self.result.diagnostics)
            logger.warning("Skipping part of the specification: %s", diag)
            return True
        return False

    def coating(self, section: _Section, path: str) -> StyleReference | None:
        lookup = self.accessor.check(section.title)
        if self.report(rules.check_coating(lookup, path, self.strict)):
            return None
        variables = dict(section.fields)
        for diag in rules.check_variables(variables, path):
            if self.report(diag):
                return None
        return StyleReference(page_name=lookup.name, variables=variables)

    def preload(self, section: _Section, path: str) -> PreloadDirective | None:
        fields = {k: v for k, v in section.fields if k in rules.PRELOAD_FIELDS}
        directive, diag = rules.build_preload(fields, path)
        if self.report(diag):
            return None
        return directive

    def application(self, raw: _Application) -> ApplicationSpecification | None:
        path = f".{raw.identifier}"
        application_id = WILDCARD
        base_page_id = 0
        if raw.identifier != WILDCARD:
            lookup = self.accessor.check_base(raw.identifier)
            diag = rules.check_base(lookup, path, self.strict)
            if diag is not None:
                if not diag.is_error:
                    self.result.pending_bases.append(lookup.name)
                self.report(diag)
                return None
            assert lookup.title is not None and lookup.page is not None
            application_id = lookup.title.text
            base_page_id = lookup.page.page_id

        entries: list[StyleReference] = []
        directives: list[PreloadDirective] = []
        preload_index = 0
        for section in raw.sections:
            if section.is_preload:
                directive = self.preload(section, f"{path}.preload[{preload_index}]")
                preload_index += 1
                if directive is not None:
                    directives.append(directive)
            else:
                entry = self.coating(section, f"{path}.coatings[{len(entries)}]")
                if entry is not None:
                    entries.append(entry)

        if not entries:
            self.report(rules.missing_data(f"{path}.coatings[]", "No usable coating sections."))
            return None
        return ApplicationSpecification(
            application_id=application_id,
            entries=tuple(entries),
            preload=rules.merge_preload(directives),
            base_page_id=base_page_id,
        )


def parse_wikitext_specification(
    text: str,
    accessor: StylePageAccessor,
    strict: bool = False,
) -> ParseResult:
    """Parse a sectioned wikitext specification.

    In lenient mode this never raises; skipped parts are reported as ERROR
    diagnostics on the result. In strict mode the first ERROR raises
    :class:`ValidationError`.
    """
    parser = _Parser(accessor, strict)
    for raw in _scan(text):
        application = parser.application(raw)
        if application is not None:
            parser.result.applications[application.application_id] = application
    return parser.result
