from __future__ import annotations

import pytest

from coatings.cache.repository import ApplicationRepository
from coatings.pages.accessor import StylePageAccessor
from coatings.resolver import ApplicationResolver


class CountingResolver(ApplicationResolver):
    """Resolver that counts how often the expensive path runs."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.fills = 0

    def resolve(self, specifications):
        self.fills += 1
        return super().resolve(specifications)


@pytest.fixture
def counting(pages, less):
    return CountingResolver(StylePageAccessor(pages), less)


@pytest.fixture
def repo(pages, cache_store, counting, config, clock):
    return ApplicationRepository(
        pages, cache_store, resolver=counting, config=config, clock=clock, sleep=clock.sleep
    )
