"""Application resolver: compiles parsed specifications into bundles."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from coatings.compiler.base import CompileError, StyleCompiler, compile_style_page
from coatings.model.application import (
    UNRESOLVED_REVISION,
    ApplicationBundle,
    ApplicationSpecification,
    StyleReference,
)
from coatings.pages.accessor import StylePageAccessor

logger = logging.getLogger(__name__)

APPLICATION_ID_VARIABLE = "application-id"


def _less_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class ApplicationResolver:
    """Resolve every entry of an application into compiled CSS.

    A failing entry never fails its application: it becomes an empty
    placeholder whose revision is recorded as ``UNRESOLVED_REVISION`` so the
    bundle still depends on the page.
    """

    def __init__(
        self,
        accessor: StylePageAccessor,
        less: StyleCompiler,
        expose_application_id: bool = True,
    ) -> None:
        self._accessor = accessor
        self._less = less
        self._expose_application_id = expose_application_id

    def _variables(self, spec: ApplicationSpecification, entry: StyleReference) -> dict[str, str]:
        merged: dict[str, str] = {}
        if self._expose_application_id:
            merged[APPLICATION_ID_VARIABLE] = _less_string(spec.application_id)
        merged.update(entry.variables)
        return merged

    def _resolve_entry(
        self, spec: ApplicationSpecification, entry: StyleReference, variables: dict[str, str]
    ) -> tuple[str, str, str]:
        """Return (page name, css, revision) for one entry."""
        lookup = self._accessor.check(entry.page_name)
        page = self._accessor.style_page(lookup)
        if page is None:
            logger.warning(
                "Application %s: coating %s does not resolve; using a placeholder",
                spec.application_id,
                entry.page_name,
            )
            return lookup.name, "", UNRESOLVED_REVISION
        try:
            css = compile_style_page(page, variables, self._less)
        except CompileError as exc:
            logger.warning(
                "Application %s: coating %s failed to compile: %s",
                spec.application_id,
                entry.page_name,
                exc,
            )
            return lookup.name, "", UNRESOLVED_REVISION
        return lookup.name, css, str(page.revision_id)

    def resolve_application(self, spec: ApplicationSpecification) -> ApplicationBundle:
        styles: list[str] = []
        revisions: dict[str, str] = {}
        variables: list[dict[str, str]] = []
        for entry in spec.entries:
            merged = self._variables(spec, entry)
            name, css, revision = self._resolve_entry(spec, entry, merged)
            styles.append(css)
            # A page listed more than once is resolved if any occurrence compiled.
            if revision != UNRESOLVED_REVISION or name not in revisions:
                revisions[name] = revision
            variables.append(merged)
        return ApplicationBundle(
            application_id=spec.application_id,
            compiled_styles=tuple(styles),
            source_revisions=revisions,
            variables=tuple(variables),
            preload=spec.preload,
            base_page_id=spec.base_page_id,
        )

    def resolve(
        self, specifications: Mapping[str, ApplicationSpecification]
    ) -> dict[str, ApplicationBundle]:
        return {
            application_id: self.resolve_application(spec)
            for application_id, spec in specifications.items()
        }
