from coatings.events.bus import PageEventBus
from coatings.events.types import EVENT_TYPES, PageDeleted, PageEvent, PagePurged, PageSaved

__all__ = ["PageEventBus", "PageEvent", "PageSaved", "PageDeleted", "PagePurged", "EVENT_TYPES"]
