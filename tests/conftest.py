from __future__ import annotations

import re
from collections.abc import Mapping

import pytest

from coatings.cache.repository import ApplicationRepository
from coatings.cache.store import MemoryCacheStore
from coatings.compiler.base import CompileError
from coatings.compiler.less import strip_declarations
from coatings.config import CoatingsConfig
from coatings.events.bus import PageEventBus
from coatings.model.page import ContentModel
from coatings.pages.accessor import StylePageAccessor
from coatings.pages.store import MemoryPageStore
from coatings.resolver import ApplicationResolver

APPLICATIONS_PAGE = "MediaWiki:Coatings-applications.json"


class FakeClock:
    """Manually advanced clock; ``sleep`` advances it instead of blocking."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.now += seconds


class SubstitutingCompiler:
    """Deterministic stand-in for the Less compiler.

    Drops top-level declarations of overridden names, removes the remaining
    declarations after recording them, and substitutes ``@name`` references.
    Source or a variable value containing ``!fail`` raises :class:`CompileError`.
    """

    _DECLARATION = re.compile(r"@([\w-]+)\s*:\s*([^;{}]*);\s*")

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, str]]] = []

    def compile(self, source: str, variables: Mapping[str, str]) -> str:
        self.calls.append((source, dict(variables)))
        if "!fail" in source or any("!fail" in v for v in variables.values()):
            raise CompileError("cannot compile")
        source = strip_declarations(source, set(variables))
        values = dict(self._DECLARATION.findall(source))
        values.update(variables)
        css = self._DECLARATION.sub("", source)
        for name in sorted(values, key=len, reverse=True):
            css = css.replace(f"@{name}", values[name])
        return css.strip()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def bus():
    return PageEventBus()


@pytest.fixture
def pages(bus):
    """In-memory page store publishing lifecycle events to ``bus``."""
    return MemoryPageStore(bus=bus)


@pytest.fixture
def accessor(pages):
    return StylePageAccessor(pages)


@pytest.fixture
def less():
    return SubstitutingCompiler()


@pytest.fixture
def resolver(accessor, less):
    return ApplicationResolver(accessor, less)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache_store(clock):
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def config():
    return CoatingsConfig(cache_ttl=600.0, lock_wait=1.0, lock_ttl=30.0, lock_poll=0.1)


@pytest.fixture
def repository(pages, cache_store, less, config, clock):
    accessor = StylePageAccessor(pages)
    return ApplicationRepository(
        pages,
        cache_store,
        resolver=ApplicationResolver(accessor, less),
        config=config,
        clock=clock,
        sleep=clock.sleep,
    )


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def save_css(pages: MemoryPageStore, name: str, text: str):
    return pages.save(name, text, ContentModel.CSS)


def save_less(pages: MemoryPageStore, name: str, text: str):
    return pages.save(name, text, ContentModel.LESS)


def save_applications(pages: MemoryPageStore, text: str, model=ContentModel.APPLICATION_LIST):
    return pages.save(APPLICATIONS_PAGE, text, model)
