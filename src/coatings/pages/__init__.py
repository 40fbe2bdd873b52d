from coatings.pages.accessor import (
    Lookup,
    LookupFailure,
    StyleLanguage,
    StylePage,
    StylePageAccessor,
)
from coatings.pages.directory import DirectoryPageStore
from coatings.pages.store import MemoryPageStore, PageStore
from coatings.pages.titles import InvalidTitleError, parse_title, try_parse_title

__all__ = [
    "PageStore",
    "MemoryPageStore",
    "DirectoryPageStore",
    "StylePageAccessor",
    "StylePage",
    "StyleLanguage",
    "Lookup",
    "LookupFailure",
    "InvalidTitleError",
    "parse_title",
    "try_parse_title",
]
