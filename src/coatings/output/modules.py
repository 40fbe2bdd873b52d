"""Style module: what a host's resource loader needs for one application."""

from __future__ import annotations

from typing import Any

from coatings.cache.repository import ApplicationRepository
from coatings.model.application import ApplicationBundle, PreloadDirective, normalize_application_id

MODULE_PREFIX = "ext.coatings."


def module_name(application_id: str | int) -> str:
    return f"{MODULE_PREFIX}{normalize_application_id(application_id)}"


class StyleModule:
    """A loadable style module backed by one cached application.

    Everything is read from the cached bundle; nothing is recompiled here.
    An unknown application yields no styles, no preloads and an empty hash.
    """

    def __init__(self, repository: ApplicationRepository, application_id: str | int) -> None:
        self._repository = repository
        self.application_id = application_id

    @property
    def name(self) -> str:
        return module_name(self.application_id)

    def bundle(self) -> ApplicationBundle | None:
        return self._repository.get_application_by_id(self.application_id)

    def get_styles(self) -> list[str]:
        """Ordered CSS blocks, placeholders dropped."""
        bundle = self.bundle()
        if bundle is None:
            return []
        return [block for block in bundle.compiled_styles if block]

    def get_preload_directives(self) -> list[PreloadDirective]:
        bundle = self.bundle()
        return list(bundle.preload) if bundle is not None else []

    def get_definition_summary(self) -> dict[str, Any]:
        bundle = self.bundle()
        return bundle.summary() if bundle is not None else {}

    def version_hash(self) -> str:
        bundle = self.bundle()
        return bundle.version_hash() if bundle is not None else ""
