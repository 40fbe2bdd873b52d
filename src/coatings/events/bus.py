"""Synchronous bus carrying page lifecycle events to whatever depends on pages."""

from __future__ import annotations

from typing import Callable

from coatings.events.types import PageEvent

Listener = Callable[[PageEvent], object]


class PageEventBus:
    """Deliver page events to listeners in the publisher's thread.

    Listeners subscribe to an event class and receive that class and its
    subclasses, so subscribing to :class:`PageEvent` hears every save,
    delete and purge. The most specific subscriptions are notified first,
    each in registration order. A listener's exception propagates to the
    page store that published the event.
    """

    def __init__(self) -> None:
        self._listeners: dict[type[PageEvent], list[Listener]] = {}

    def subscribe(self, event_type: type[PageEvent], callback: Listener) -> None:
        if not (isinstance(event_type, type) and issubclass(event_type, PageEvent)):
            raise TypeError(f"{event_type!r} is not a page event type")
        self._listeners.setdefault(event_type, []).append(callback)

    def listeners_for(self, event_type: type[PageEvent]) -> list[Listener]:
        listeners: list[Listener] = []
        for cls in event_type.__mro__:
            listeners.extend(self._listeners.get(cls, ()))
        return listeners

    def listener_count(self, event_type: type[PageEvent]) -> int:
        return len(self.listeners_for(event_type))

    def publish(self, event: PageEvent) -> None:
        for callback in self.listeners_for(type(event)):
            callback(event)
