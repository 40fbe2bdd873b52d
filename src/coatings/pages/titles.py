"""Title parsing and normalisation."""

from __future__ import annotations

import re
from collections.abc import Iterable

from coatings.model.page import NAMESPACE_PREFIXES, Namespace, PageTitle

__all__ = ["InvalidTitleError", "parse_title", "try_parse_title"]

_ILLEGAL_RE = re.compile(r"[\[\]{}|#<>\x00-\x1f]")
_WHITESPACE_RE = re.compile(r"[\s_]+")
# "." and ".." as whole path segments, or a leading slash
_RELATIVE_PATH_RE = re.compile(r"(?:^|/)\.\.?(?:/|$)|^/")


class InvalidTitleError(ValueError):
    """Raised when text cannot be turned into a page title."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid title {text!r}: {reason}")


def _normalize(text: str) -> str:
    text = _WHITESPACE_RE.sub(" ", text).strip()
    if text:
        text = text[0].upper() + text[1:]
    return text


def _split_prefix(text: str) -> tuple[str, str] | None:
    if ":" not in text:
        return None
    prefix, rest = text.split(":", 1)
    return prefix.strip(), rest


def parse_title(
    text: str,
    default_namespace: Namespace = Namespace.MAIN,
    interwiki_prefixes: Iterable[str] = (),
) -> PageTitle:
    """Parse *text* into a :class:`PageTitle`.

    A leading ``Namespace:`` prefix overrides *default_namespace*; a leading
    interwiki prefix produces an external title.
    """
    raw = text
    text = _normalize(text)
    if not text:
        raise InvalidTitleError(raw, "empty title")
    if _ILLEGAL_RE.search(text):
        raise InvalidTitleError(raw, "contains illegal characters")

    interwiki = ""
    interwikis = {p.lower() for p in interwiki_prefixes}
    split = _split_prefix(text)
    if split is not None and split[0].lower() in interwikis:
        interwiki = split[0].lower()
        text = _normalize(split[1])
        if not text:
            raise InvalidTitleError(raw, "empty title after interwiki prefix")
        split = _split_prefix(text)

    namespace = default_namespace
    if split is not None and split[0].lower() in NAMESPACE_PREFIXES:
        namespace = NAMESPACE_PREFIXES[split[0].lower()]
        text = _normalize(split[1])
        if not text:
            raise InvalidTitleError(raw, "empty title after namespace prefix")

    if _RELATIVE_PATH_RE.search(text):
        raise InvalidTitleError(raw, "contains a relative path")

    return PageTitle(namespace=namespace, text=text, interwiki=interwiki)


def try_parse_title(
    text: str,
    default_namespace: Namespace = Namespace.MAIN,
    interwiki_prefixes: Iterable[str] = (),
) -> PageTitle | None:
    """Like :func:`parse_title` but returns ``None`` for invalid input."""
    try:
        return parse_title(text, default_namespace, interwiki_prefixes)
    except InvalidTitleError:
        return None
