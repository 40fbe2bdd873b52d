"""Style compiler boundary: protocol, error type and dispatch over languages."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from coatings.pages.accessor import StyleLanguage, StylePage


class CompileError(Exception):
    """Raised when style source cannot be compiled."""

    def __init__(self, message: str, *, page: str = "", cause: Exception | None = None) -> None:
        super().__init__(message)
        self.page = page
        self.cause = cause


class StyleCompiler(Protocol):
    """A pure function from (source, variables) to CSS text.

    Implementations must be deterministic for identical inputs and must not
    carry state from one call to the next.
    """

    def compile(self, source: str, variables: Mapping[str, str]) -> str: ...


class PlainCssCompiler:
    """Identity compiler for plain CSS pages; variables are ignored."""

    def compile(self, source: str, variables: Mapping[str, str]) -> str:
        return source


def compile_style_page(
    page: StylePage,
    variables: Mapping[str, str],
    less: StyleCompiler,
) -> str:
    """Compile *page* according to its language."""
    if page.language is StyleLanguage.LESS:
        try:
            return less.compile(page.text, variables)
        except CompileError as exc:
            if not exc.page:
                exc.page = page.name
            raise
    return PlainCssCompiler().compile(page.text, variables)
