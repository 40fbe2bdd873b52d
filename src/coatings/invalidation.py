"""Invalidation trigger: page lifecycle events in, cache invalidation out."""

from __future__ import annotations

import logging

from coatings.cache.repository import ApplicationRepository
from coatings.events.bus import PageEventBus
from coatings.events.types import PageEvent
from coatings.model.page import PageTitle

logger = logging.getLogger(__name__)


class InvalidationTrigger:
    """Forward every page save, delete and purge to the repository.

    Each hook returns whether the application cache was invalidated.
    """

    def __init__(self, repository: ApplicationRepository) -> None:
        self._repository = repository

    def page_saved(self, title: PageTitle | str) -> bool:
        return self._forward("saved", title)

    def page_deleted(self, title: PageTitle | str) -> bool:
        return self._forward("deleted", title)

    def page_purged(self, title: PageTitle | str) -> bool:
        return self._forward("purged", title)

    def handle(self, event: PageEvent) -> bool:
        return self._forward(event.kind, event.title)

    def _forward(self, change: str, title: PageTitle | str) -> bool:
        invalidated = self._repository.on_dependent_page_changed(title)
        if invalidated:
            logger.info("Page %s %s; application cache invalidated", title, change)
        return invalidated

    def attach(self, bus: PageEventBus) -> None:
        """Hear every page event published on *bus*."""
        bus.subscribe(PageEvent, self.handle)
