from __future__ import annotations

import pytest

from coatings.model.page import ContentModel


@pytest.fixture
def site(pages):
    """A small wiki: one template, one CSS page and one Less page."""
    pages.save("Template:Infobox", "{{{1}}}")
    pages.save("Style:Base.css", "body{margin:0}")
    pages.save("Style:Theme.less", "@accent: red;\n.infobox{color:@accent}")
    pages.save("Style:Readme", "words", ContentModel.WIKITEXT)
    return pages
