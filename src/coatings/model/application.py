"""Application model: parsed specifications and compiled bundles."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any

WILDCARD = "*"

# Revision id recorded for an entry whose page could not be resolved.
UNRESOLVED_REVISION = "0"


def normalize_application_id(application_id: str | int) -> str | int:
    """Map the catch-all spellings ("*", "", "0", 0) onto ``WILDCARD``.

    Other integers are returned unchanged (they are base page ids); other
    strings are stripped.
    """
    if isinstance(application_id, int):
        return WILDCARD if application_id == 0 else application_id
    value = application_id.strip()
    if value in ("", "0", WILDCARD):
        return WILDCARD
    return value


@dataclass(frozen=True)
class StyleReference:
    """A coating: one style page plus the variables it is compiled with."""

    page_name: str
    variables: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PreloadDirective:
    """A ``<link rel="preload">`` hint served alongside an application."""

    href: str
    as_: str
    type: str | None = None
    media: str | None = None
    crossorigin: str | None = None

    def to_dict(self) -> dict[str, str]:
        data = {"href": self.href, "as": self.as_}
        for key in ("type", "media", "crossorigin"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PreloadDirective:
        return cls(
            href=data["href"],
            as_=data["as"],
            type=data.get("type"),
            media=data.get("media"),
            crossorigin=data.get("crossorigin"),
        )


@dataclass(frozen=True)
class ApplicationSpecification:
    """Parsed, not yet compiled, intent for one application."""

    application_id: str
    entries: tuple[StyleReference, ...]
    preload: tuple[PreloadDirective, ...] = ()
    base_page_id: int = 0
    variables: dict[str, str] = field(default_factory=dict)

    @property
    def is_wildcard(self) -> bool:
        return self.application_id == WILDCARD


@dataclass(frozen=True)
class ApplicationBundle:
    """The compiled, cache-resident result for one application.

    ``compiled_styles`` holds exactly one block per specification entry;
    entries that failed to resolve contribute an empty placeholder and are
    recorded in ``source_revisions`` with ``UNRESOLVED_REVISION``.
    """

    application_id: str
    compiled_styles: tuple[str, ...]
    source_revisions: dict[str, str]
    variables: tuple[dict[str, str], ...] = ()
    preload: tuple[PreloadDirective, ...] = ()
    base_page_id: int = 0

    @property
    def is_wildcard(self) -> bool:
        return self.application_id == WILDCARD

    @property
    def css(self) -> str:
        return "\n".join(block for block in self.compiled_styles if block)

    def referenced_pages(self) -> list[str]:
        return list(self.source_revisions)

    def unresolved_pages(self) -> list[str]:
        return [
            name
            for name, revision in self.source_revisions.items()
            if revision == UNRESOLVED_REVISION
        ]

    def summary(self) -> dict[str, Any]:
        """Definition summary: everything that should change the served URL."""
        return {
            "id": self.application_id,
            "revisions": dict(self.source_revisions),
            "variables": [dict(v) for v in self.variables],
            "preload": [d.to_dict() for d in self.preload],
        }

    def version_hash(self) -> str:
        payload = json.dumps(self.summary(), sort_keys=True).encode("utf-8")
        return hashlib.sha1(payload).hexdigest()[:12]
