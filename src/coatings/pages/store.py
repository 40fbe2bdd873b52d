"""Page store boundary and an in-memory implementation."""

from __future__ import annotations

import itertools
import threading
from typing import Protocol

from coatings.events.bus import PageEventBus
from coatings.events.types import PageDeleted, PagePurged, PageSaved
from coatings.model.page import ContentModel, Namespace, Page, PageTitle, default_content_model
from coatings.pages.titles import parse_title


class PageStore(Protocol):
    """Read access to the wiki's current page revisions."""

    interwiki_prefixes: tuple[str, ...]

    def get_page(self, title: PageTitle) -> Page | None:
        """Return the current revision of *title*, or None if it does not exist."""
        ...


class MemoryPageStore:
    """Thread-safe in-memory page store.

    When constructed with a :class:`PageEventBus`, every save, delete and purge
    publishes the matching lifecycle event after the change is visible.
    """

    def __init__(
        self,
        bus: PageEventBus | None = None,
        interwiki_prefixes: tuple[str, ...] = ("wikipedia", "commons", "meta"),
        template_css_model: bool = False,
    ) -> None:
        self.interwiki_prefixes = interwiki_prefixes
        self._bus = bus
        self._template_css_model = template_css_model
        self._pages: dict[tuple[Namespace, str], Page] = {}
        self._page_ids = itertools.count(1)
        self._revision_ids = itertools.count(1)
        self._lock = threading.Lock()

    def _title(self, title: str | PageTitle) -> PageTitle:
        if isinstance(title, PageTitle):
            return title
        return parse_title(title, interwiki_prefixes=self.interwiki_prefixes)

    def get_page(self, title: PageTitle) -> Page | None:
        if title.is_external:
            return None
        with self._lock:
            return self._pages.get((title.namespace, title.text))

    def get(self, title: str | PageTitle) -> Page | None:
        return self.get_page(self._title(title))

    def save(
        self,
        title: str | PageTitle,
        text: str,
        content_model: ContentModel | None = None,
    ) -> Page:
        """Create or update a page, returning the new revision."""
        page_title = self._title(title)
        with self._lock:
            key = (page_title.namespace, page_title.text)
            existing = self._pages.get(key)
            if content_model is None:
                content_model = (
                    existing.content_model
                    if existing is not None
                    else default_content_model(page_title, self._template_css_model)
                )
            page = Page(
                title=page_title,
                page_id=existing.page_id if existing else next(self._page_ids),
                revision_id=next(self._revision_ids),
                content_model=content_model,
                text=text,
            )
            self._pages[key] = page
        if self._bus is not None:
            self._bus.publish(PageSaved(title=page_title, revision_id=page.revision_id))
        return page

    def delete(self, title: str | PageTitle) -> bool:
        page_title = self._title(title)
        with self._lock:
            removed = self._pages.pop((page_title.namespace, page_title.text), None)
        if removed is not None and self._bus is not None:
            self._bus.publish(PageDeleted(title=page_title))
        return removed is not None

    def purge(self, title: str | PageTitle) -> None:
        page_title = self._title(title)
        if self._bus is not None:
            self._bus.publish(PagePurged(title=page_title))

    def titles(self) -> list[PageTitle]:
        with self._lock:
            return [page.title for page in self._pages.values()]
