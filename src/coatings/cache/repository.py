"""Application repository: the cache-coherent view of every application.

The whole application map is one cache entry. It is filled on demand under a
stampede lock and is considered fresh while three things hold: it was
written by this code's ``SCHEMA_VERSION``, the check-key generation it was
computed at is still current, and its TTL has not run out. Any dependent
page change bumps the generation, so every process sharing the store sees
the change on its next read.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from coatings.cache.codec import decode_applications, encode_applications
from coatings.cache.store import CacheStore
from coatings.compiler.less import LessCompiler
from coatings.config import CoatingsConfig
from coatings.model.application import ApplicationBundle, normalize_application_id
from coatings.model.page import Namespace, PageTitle
from coatings.pages.accessor import StylePageAccessor
from coatings.pages.store import PageStore
from coatings.pages.titles import parse_title, try_parse_title
from coatings.resolver import ApplicationResolver
from coatings.specification.errors import ValidationError
from coatings.specification.parser import dialect_for, parse_specification

logger = logging.getLogger(__name__)

# Bump whenever the encoded bundle layout changes.
SCHEMA_VERSION = 3

CACHE_KEY = "coatings:applications"
CHECK_KEY = "coatings:applications:check"
LOCK_KEY = "coatings:applications:lock"


@dataclass(frozen=True)
class _Fill:
    applications: dict[str, ApplicationBundle]
    cacheable: bool
    pending_bases: tuple[str, ...] = ()


class ApplicationRepository:
    """Read-through cache of compiled applications.

    ``clock`` and ``sleep`` are injectable so tests can drive TTL expiry and
    lock waits without real time passing.
    """

    def __init__(
        self,
        pages: PageStore,
        store: CacheStore,
        resolver: ApplicationResolver | None = None,
        config: CoatingsConfig | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config or CoatingsConfig()
        self._pages = pages
        self._store = store
        self._accessor = StylePageAccessor(pages)
        self._resolver = resolver or ApplicationResolver(
            self._accessor,
            LessCompiler(),
            expose_application_id=self._config.expose_application_id,
        )
        self._clock = clock
        self._sleep = sleep
        self._applications_title = parse_title(
            self._config.applications_page,
            interwiki_prefixes=pages.interwiki_prefixes,
        )

    @property
    def accessor(self) -> StylePageAccessor:
        return self._accessor

    @property
    def applications_title(self) -> PageTitle:
        return self._applications_title

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_applications(self) -> dict[str, ApplicationBundle]:
        """Return every application, filling the cache if it is not fresh."""
        entry = self._store.get(CACHE_KEY)
        if self._is_fresh(entry, self._store.get_generation(CHECK_KEY)):
            assert entry is not None
            return decode_applications(entry["applications"])
        return self._refresh(entry)

    def get_application_by_id(self, application_id: str | int) -> ApplicationBundle | None:
        """Look an application up by id, base page id, or base template title.

        The catch-all spellings (``"*"``, ``""``, ``"0"``, ``0``) all select
        the wildcard application.
        """
        key = normalize_application_id(application_id)
        applications = self.get_applications()
        if isinstance(key, str) and key.isdigit():
            key = int(key)
        if isinstance(key, int):
            for bundle in applications.values():
                if bundle.base_page_id == key:
                    return bundle
            return None
        if key in applications:
            return applications[key]
        title = try_parse_title(key, Namespace.TEMPLATE, self._pages.interwiki_prefixes)
        if title is None or title.is_external or title.namespace is not Namespace.TEMPLATE:
            return None
        return applications.get(title.text)

    def get_application_ids(self) -> list[str]:
        return list(self.get_applications())

    def cached_applications(self) -> dict[str, ApplicationBundle] | None:
        """Return whatever is stored, fresh or not, without filling."""
        entry = self._store.get(CACHE_KEY)
        if entry is None or entry.get("schema_version") != SCHEMA_VERSION:
            return None
        return decode_applications(entry["applications"])

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    def invalidate(self) -> int:
        """Bump the check key; every stored entry becomes stale."""
        generation = self._store.bump_generation(CHECK_KEY)
        logger.info("Application cache invalidated (generation %d)", generation)
        return generation

    def on_dependent_page_changed(self, title: PageTitle | str) -> bool:
        """Invalidate if *title* is something the cached applications depend on.

        Dependencies are the applications page itself, every style page a
        cached bundle references, every base template a cached bundle is
        attached to, and every base template that did not exist at fill time.
        The stored entry is inspected as is and never filled.
        Returns True when the cache was invalidated.
        """
        if isinstance(title, str):
            parsed = try_parse_title(title, interwiki_prefixes=self._pages.interwiki_prefixes)
            if parsed is None:
                return False
            title = parsed
        if title.is_external:
            return False
        if title.same_page_as(self._applications_title):
            self.invalidate()
            return True

        entry = self._store.get(CACHE_KEY)
        if entry is None or entry.get("schema_version") != SCHEMA_VERSION:
            return False
        if self._depends_on(entry, title):
            logger.debug("Dependent page %s changed", title)
            self.invalidate()
            return True
        return False

    def _depends_on(self, entry: dict[str, Any], title: PageTitle) -> bool:
        prefixes = self._pages.interwiki_prefixes
        for name in entry.get("pending_bases", []):
            pending = try_parse_title(name, Namespace.TEMPLATE, prefixes)
            if pending is not None and pending.same_page_as(title):
                return True
        for bundle in decode_applications(entry["applications"]).values():
            if (
                not bundle.is_wildcard
                and title.namespace is Namespace.TEMPLATE
                and title.text == bundle.application_id
            ):
                return True
            for name in bundle.referenced_pages():
                referenced = try_parse_title(name, Namespace.STYLE, prefixes)
                if referenced is not None and referenced.same_page_as(title):
                    return True
        return False

    # ------------------------------------------------------------------
    # Fill
    # ------------------------------------------------------------------

    def _is_fresh(self, entry: dict[str, Any] | None, generation: int) -> bool:
        if entry is None:
            return False
        if entry.get("schema_version") != SCHEMA_VERSION:
            return False
        if entry.get("generation") != generation:
            return False
        return self._clock() < entry["created_at"] + entry["ttl"]

    def _acquire_lock(self) -> str | None:
        deadline = self._clock() + self._config.lock_wait
        while True:
            owner = self._store.acquire_lock(LOCK_KEY, self._config.lock_ttl)
            if owner is not None:
                return owner
            if self._clock() >= deadline:
                return None
            self._sleep(self._config.lock_poll)

    def _refresh(self, stale: dict[str, Any] | None) -> dict[str, ApplicationBundle]:
        owner = self._acquire_lock()
        if owner is None:
            if stale is not None and stale.get("schema_version") == SCHEMA_VERSION:
                logger.info("Fill lock busy; serving stale applications")
                return decode_applications(stale["applications"])
            logger.info("Fill lock busy and nothing usable cached; computing without storing")
            return self._fill().applications

        try:
            # Another process may have filled while we waited.
            generation = self._store.get_generation(CHECK_KEY)
            entry = self._store.get(CACHE_KEY)
            if self._is_fresh(entry, generation):
                assert entry is not None
                return decode_applications(entry["applications"])

            fill = self._fill()
            if fill.cacheable:
                self._store.set(CACHE_KEY, self._envelope(fill, generation))
                logger.info(
                    "Stored %d application(s) at generation %d",
                    len(fill.applications),
                    generation,
                )
            else:
                self._store.delete(CACHE_KEY)
            return fill.applications
        finally:
            self._store.release_lock(LOCK_KEY, owner)

    def _envelope(self, fill: _Fill, generation: int) -> dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "generation": generation,
            "created_at": self._clock(),
            "ttl": self._config.cache_ttl,
            "applications": encode_applications(fill.applications),
            "pending_bases": list(fill.pending_bases),
        }

    def _fill(self) -> _Fill:
        page = self._pages.get_page(self._applications_title)
        if page is None or page.is_empty:
            logger.info("No applications page at %s", self._applications_title)
            return _Fill({}, cacheable=False)
        dialect = dialect_for(page.content_model)
        if dialect is None:
            logger.warning(
                "Applications page %s has unsupported content model %s",
                self._applications_title,
                page.content_model,
            )
            return _Fill({}, cacheable=False)

        try:
            result = parse_specification(page.text, dialect, self._accessor, strict=False)
        except ValidationError as exc:
            logger.warning("Applications page %s is invalid: %s", self._applications_title, exc)
            return _Fill({}, cacheable=True)
        for diag in result.diagnostics:
            logger.warning("Applications page %s: %s", self._applications_title, diag)

        return _Fill(
            self._resolver.resolve(result.applications),
            cacheable=True,
            pending_bases=tuple(result.pending_bases),
        )
