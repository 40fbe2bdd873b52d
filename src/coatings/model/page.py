"""Page model: namespaces, content models, titles, and page snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum


class Namespace(IntEnum):
    """Wiki namespaces the plugin cares about."""

    MAIN = 0
    MEDIAWIKI = 8
    TEMPLATE = 10
    STYLE = 3200

    @property
    def canonical_name(self) -> str:
        return _CANONICAL_NAMES[self]


_CANONICAL_NAMES: dict[Namespace, str] = {
    Namespace.MAIN: "",
    Namespace.MEDIAWIKI: "MediaWiki",
    Namespace.TEMPLATE: "Template",
    Namespace.STYLE: "Style",
}

# Lower-cased prefix -> namespace, including legacy aliases.
NAMESPACE_PREFIXES: dict[str, Namespace] = {
    "mediawiki": Namespace.MEDIAWIKI,
    "template": Namespace.TEMPLATE,
    "style": Namespace.STYLE,
    "rawcss": Namespace.STYLE,
}


class ContentModel(StrEnum):
    """Content models a page revision can carry."""

    WIKITEXT = "wikitext"
    CSS = "css"
    LESS = "less"
    JSON = "json"
    APPLICATION_LIST = "coatings-application-list"


@dataclass(frozen=True)
class PageTitle:
    """A normalised page title.

    ``interwiki`` is non-empty when the title points at another wiki; such
    titles are never resolvable locally.
    """

    namespace: Namespace
    text: str
    interwiki: str = ""

    @property
    def is_external(self) -> bool:
        return bool(self.interwiki)

    @property
    def prefixed_text(self) -> str:
        prefix = self.namespace.canonical_name
        local = f"{prefix}:{self.text}" if prefix else self.text
        if self.interwiki:
            return f"{self.interwiki}:{local}"
        return local

    def same_page_as(self, other: PageTitle) -> bool:
        return (
            not self.is_external
            and not other.is_external
            and self.namespace == other.namespace
            and self.text == other.text
        )

    def __str__(self) -> str:
        return self.prefixed_text


@dataclass(frozen=True)
class Page:
    """Snapshot of a page's current revision."""

    title: PageTitle
    page_id: int
    revision_id: int
    content_model: ContentModel
    text: str

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


def default_content_model(title: PageTitle, template_css_model: bool = False) -> ContentModel:
    """Return the content model a new page at *title* gets by default."""
    name = title.text.lower()
    if title.namespace is Namespace.MEDIAWIKI and name.endswith(".json"):
        return ContentModel.APPLICATION_LIST
    if title.namespace is Namespace.STYLE:
        if name.endswith(".less"):
            return ContentModel.LESS
        if name.endswith(".css"):
            return ContentModel.CSS
    if title.namespace is Namespace.TEMPLATE and template_css_model and name.endswith(".css"):
        return ContentModel.CSS
    return ContentModel.WIKITEXT
