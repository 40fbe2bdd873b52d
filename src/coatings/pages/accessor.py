"""Style page accessor: turns a page reference into resolvable style source.

No caching happens here; the application cache is the only cache layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from coatings.model.page import ContentModel, Namespace, Page, PageTitle
from coatings.pages.store import PageStore
from coatings.pages.titles import try_parse_title

STYLE_NAMESPACES = frozenset({Namespace.STYLE, Namespace.TEMPLATE})
BASE_NAMESPACE = Namespace.TEMPLATE


class StyleLanguage(StrEnum):
    """The two kinds of style source a coating can hold."""

    LESS = "less"
    CSS = "css"


_LANGUAGES: dict[ContentModel, StyleLanguage] = {
    ContentModel.LESS: StyleLanguage.LESS,
    ContentModel.CSS: StyleLanguage.CSS,
}


class LookupFailure(StrEnum):
    """Why a page reference did not resolve."""

    INVALID_TITLE = "invalid-title"
    EXTERNAL = "external"
    WRONG_NAMESPACE = "wrong-namespace"
    MISSING = "missing"
    WRONG_CONTENT_MODEL = "wrong-content-model"

    @property
    def is_permanent(self) -> bool:
        """True when no future edit of the page itself can fix the reference."""
        return self in (
            LookupFailure.INVALID_TITLE,
            LookupFailure.EXTERNAL,
            LookupFailure.WRONG_NAMESPACE,
        )


@dataclass(frozen=True)
class StylePage:
    title: PageTitle
    text: str
    language: StyleLanguage
    revision_id: int

    @property
    def name(self) -> str:
        return self.title.prefixed_text


@dataclass(frozen=True)
class Lookup:
    """Outcome of resolving a reference: the page, or the reason it failed."""

    reference: str
    title: PageTitle | None
    page: Page | None = None
    failure: LookupFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def name(self) -> str:
        """Canonical name for the reference, falling back to the raw text."""
        return self.title.prefixed_text if self.title is not None else self.reference


class StylePageAccessor:
    """Look up style pages and base templates in a :class:`PageStore`."""

    def __init__(self, pages: PageStore) -> None:
        self._pages = pages

    @property
    def pages(self) -> PageStore:
        return self._pages

    def _lookup(
        self,
        reference: str,
        default_namespace: Namespace,
        allowed: frozenset[Namespace],
    ) -> Lookup:
        title = try_parse_title(reference, default_namespace, self._pages.interwiki_prefixes)
        if title is None:
            return Lookup(reference, None, failure=LookupFailure.INVALID_TITLE)
        if title.is_external:
            return Lookup(reference, title, failure=LookupFailure.EXTERNAL)
        if title.namespace not in allowed:
            return Lookup(reference, title, failure=LookupFailure.WRONG_NAMESPACE)
        page = self._pages.get_page(title)
        if page is None:
            return Lookup(reference, title, failure=LookupFailure.MISSING)
        return Lookup(reference, title, page=page)

    def check(
        self,
        page_name: str,
        default_namespace: Namespace = Namespace.STYLE,
        less_only: bool = False,
    ) -> Lookup:
        """Look up a coating and report why it is unusable, if it is."""
        lookup = self._lookup(page_name, default_namespace, STYLE_NAMESPACES)
        if not lookup.ok:
            return lookup
        assert lookup.page is not None
        language = _LANGUAGES.get(lookup.page.content_model)
        if language is None or (less_only and language is not StyleLanguage.LESS):
            return Lookup(
                page_name,
                lookup.title,
                page=lookup.page,
                failure=LookupFailure.WRONG_CONTENT_MODEL,
            )
        return lookup

    def resolve(
        self,
        page_name: str,
        default_namespace: Namespace = Namespace.STYLE,
        less_only: bool = False,
    ) -> StylePage | None:
        """Return the style page for *page_name*, or None if it is unusable.

        ``less_only`` restricts matches to Less pages, for callers that need
        a variable-definition page rather than a finished stylesheet.
        """
        return self.style_page(self.check(page_name, default_namespace, less_only))

    def style_page(self, lookup: Lookup) -> StylePage | None:
        """Return the style page behind a successful :meth:`check`."""
        if not lookup.ok:
            return None
        page = lookup.page
        assert page is not None
        return StylePage(
            title=page.title,
            text=page.text,
            language=_LANGUAGES[page.content_model],
            revision_id=page.revision_id,
        )

    def check_base(self, base: str) -> Lookup:
        """Look up the template an application is attached to."""
        return self._lookup(base, BASE_NAMESPACE, frozenset({BASE_NAMESPACE}))

    def get_page(self, title: PageTitle) -> Page | None:
        return self._pages.get_page(title)
