"""Render preload directives as ``<link>`` tags and ``Link`` header values."""

from __future__ import annotations

import html
from collections.abc import Iterable
from urllib.parse import quote

from coatings.model.application import PreloadDirective


def preload_link_attributes(directive: PreloadDirective) -> dict[str, str]:
    """Attributes for a ``<link rel="preload">`` element, in output order."""
    attributes = {"rel": "preload", "href": directive.href, "as": directive.as_}
    if directive.type is not None:
        attributes["type"] = directive.type
    if directive.media is not None:
        attributes["media"] = directive.media
    if directive.crossorigin is not None:
        attributes["crossorigin"] = directive.crossorigin
    return attributes


def format_link_header(directive: PreloadDirective) -> str:
    """Format one directive as a ``Link`` header value.

    Parameter values are percent-encoded, so a media query such as
    ``(min-width: 600px)`` cannot break the header syntax::

        <https://example.org/a.woff2>;rel="preload";as="font";type="font%2Fwoff2"
    """
    parts = [f"<{directive.href}>"]
    for name, value in preload_link_attributes(directive).items():
        if name == "href":
            continue
        parts.append(f'{name}="{quote(value, safe="")}"')
    return ";".join(parts)


def render_link_tags(directives: Iterable[PreloadDirective]) -> str:
    tags = []
    for directive in directives:
        attributes = " ".join(
            f'{name}="{html.escape(value, quote=True)}"'
            for name, value in preload_link_attributes(directive).items()
        )
        tags.append(f"<link {attributes}>")
    return "\n".join(tags)
