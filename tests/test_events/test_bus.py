"""Tests for the page event bus."""

import pytest

from coatings.events.bus import PageEventBus
from coatings.events.types import EVENT_TYPES, PageDeleted, PageEvent, PagePurged, PageSaved
from coatings.pages.titles import parse_title

TITLE = parse_title("Style:A.css")


class TestSubscribe:
    def test_rejects_non_page_events(self):
        with pytest.raises(TypeError):
            PageEventBus().subscribe(dict, print)

    def test_counts_listeners_through_base_class(self):
        bus = PageEventBus()
        bus.subscribe(PageEvent, print)
        bus.subscribe(PageSaved, print)
        assert bus.listener_count(PageSaved) == 2
        assert bus.listener_count(PageDeleted) == 1
        assert bus.listener_count(PageEvent) == 1


class TestPublish:
    def test_delivers_only_matching_type(self):
        bus = PageEventBus()
        saved = []
        bus.subscribe(PageSaved, saved.append)
        bus.publish(PageDeleted(title=TITLE))
        bus.publish(PageSaved(title=TITLE, revision_id=3))
        assert saved == [PageSaved(title=TITLE, revision_id=3)]

    def test_specific_listeners_run_before_general_ones(self):
        bus = PageEventBus()
        order = []
        bus.subscribe(PageEvent, lambda e: order.append("any"))
        bus.subscribe(PagePurged, lambda e: order.append("purged"))
        bus.publish(PagePurged(title=TITLE))
        assert order == ["purged", "any"]

    def test_listener_error_reaches_publisher(self):
        bus = PageEventBus()

        def fail(event):
            raise RuntimeError("boom")

        bus.subscribe(PageEvent, fail)
        with pytest.raises(RuntimeError):
            bus.publish(PageSaved(title=TITLE))


class TestEventTypes:
    def test_kinds(self):
        assert EVENT_TYPES == {
            "saved": PageSaved,
            "deleted": PageDeleted,
            "purged": PagePurged,
        }

    def test_events_of_different_kinds_are_unequal(self):
        assert PageDeleted(title=TITLE) != PagePurged(title=TITLE)
