"""Page lifecycle events published by a page store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from coatings.model.page import PageTitle


@dataclass(frozen=True)
class PageEvent:
    """Something happened to a page; ``kind`` names what."""

    title: PageTitle
    kind: ClassVar[str] = ""


@dataclass(frozen=True)
class PageSaved(PageEvent):
    revision_id: int = 0
    kind: ClassVar[str] = "saved"


@dataclass(frozen=True)
class PageDeleted(PageEvent):
    kind: ClassVar[str] = "deleted"


@dataclass(frozen=True)
class PagePurged(PageEvent):
    kind: ClassVar[str] = "purged"


EVENT_TYPES: dict[str, type[PageEvent]] = {
    cls.kind: cls for cls in (PageSaved, PageDeleted, PagePurged)
}

