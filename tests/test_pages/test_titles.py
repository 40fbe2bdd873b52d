"""Tests for title parsing and normalisation."""

import pytest

from coatings.model.page import Namespace
from coatings.pages.titles import InvalidTitleError, parse_title, try_parse_title

PREFIXES = ("wikipedia", "meta")


class TestNormalisation:
    def test_underscores_and_spaces_collapse(self):
        title = parse_title("  multiple   spaces_here ")
        assert title.text == "Multiple spaces here"

    def test_first_letter_uppercased(self):
        assert parse_title("style:base_theme.less").text == "Base theme.less"

    def test_default_namespace(self):
        title = parse_title("Infobox", Namespace.TEMPLATE)
        assert title.namespace is Namespace.TEMPLATE
        assert title.prefixed_text == "Template:Infobox"


class TestNamespacePrefixes:
    @pytest.mark.parametrize(
        "text,namespace",
        [
            ("Style:A.css", Namespace.STYLE),
            ("RawCSS:A.css", Namespace.STYLE),
            ("template:Infobox", Namespace.TEMPLATE),
            ("MediaWiki:Coatings-applications.json", Namespace.MEDIAWIKI),
        ],
    )
    def test_prefix_selects_namespace(self, text, namespace):
        assert parse_title(text, Namespace.STYLE).namespace is namespace

    def test_unknown_prefix_stays_in_text(self):
        title = parse_title("Help:Contents", Namespace.STYLE)
        assert title.namespace is Namespace.STYLE
        assert title.text == "Help:Contents"


class TestInterwiki:
    def test_interwiki_prefix_is_external(self):
        title = parse_title("wikipedia:Template:Infobox", interwiki_prefixes=PREFIXES)
        assert title.is_external
        assert title.interwiki == "wikipedia"
        assert title.namespace is Namespace.TEMPLATE

    def test_not_external_without_configured_prefix(self):
        title = parse_title("wikipedia:Foo")
        assert not title.is_external


class TestInvalidTitles:
    @pytest.mark.parametrize("text", ["", "   ", "A|B", "A[1]", "A#b", "<x>", "A{b}"])
    def test_rejected(self, text):
        with pytest.raises(InvalidTitleError):
            parse_title(text)

    @pytest.mark.parametrize(
        "text",
        [
            "..",
            "Style:..",
            "../secret.css",
            "Style:../../secret.css",
            "A/../B",
            "./A",
            "A/.",
            "/etc/passwd",
        ],
    )
    def test_relative_paths_rejected(self, text):
        with pytest.raises(InvalidTitleError, match="relative path"):
            parse_title(text)

    @pytest.mark.parametrize("text", ["Skins/Dark.css", ".hidden.css", "A..B", "A/.../B"])
    def test_dots_inside_segments_allowed(self, text):
        assert parse_title(text).text == text[0].upper() + text[1:]

    def test_empty_after_namespace(self):
        with pytest.raises(InvalidTitleError, match="namespace"):
            parse_title("Template:")

    def test_try_parse_returns_none(self):
        assert try_parse_title("A|B") is None
        assert try_parse_title("A") is not None
