"""Pick the applications whose styles a rendered page should load."""

from __future__ import annotations

from collections.abc import Iterable

from coatings.cache.repository import ApplicationRepository
from coatings.config import CoatingsConfig
from coatings.model.application import WILDCARD
from coatings.model.page import Namespace
from coatings.pages.titles import try_parse_title


def select_applications(
    repository: ApplicationRepository,
    page: str | None,
    template_titles: Iterable[str],
    skin: str | None,
    config: CoatingsConfig,
) -> list[str]:
    """Return the ids of the applications to load for *page*, in load order.

    Applications attached to the templates the page transcludes come first,
    then the page itself when it is a template. The catch-all application
    is used only when nothing else matched. A skin outside the configured
    allow-list gets nothing.
    """
    if not config.skin_allowed(skin):
        return []

    applications = repository.get_applications()
    prefixes = config.interwiki_prefixes
    selected: list[str] = []

    def add(name: str, default_namespace: Namespace) -> None:
        title = try_parse_title(name, default_namespace, prefixes)
        if title is None or title.is_external or title.namespace is not Namespace.TEMPLATE:
            return
        if title.text in applications and title.text not in selected:
            selected.append(title.text)

    for template in template_titles:
        add(template, Namespace.TEMPLATE)
    if page:
        add(page, Namespace.MAIN)

    if not selected and WILDCARD in applications:
        selected.append(WILDCARD)
    return selected
