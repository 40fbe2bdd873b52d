from __future__ import annotations

import json

import pytest

from tests.conftest import save_applications, save_css


@pytest.fixture
def site(pages):
    pages.save("Template:Infobox", "{{{1}}}")
    pages.save("Template:Navbox", "nav")
    pages.save("Template:Plain", "plain")
    save_css(pages, "Style:Base.css", "body{margin:0}")
    save_css(pages, "Style:Infobox.css", ".infobox{}")
    save_css(pages, "Style:Navbox.css", ".navbox{}")
    save_applications(
        pages,
        json.dumps(
            {
                "*": {"coatings": ["Base.css"]},
                "Infobox": {
                    "coatings": ["Infobox.css", "Later.css"],
                    "preload": [{"href": "/fonts/a.woff2", "as": "font", "crossorigin": True}],
                },
                "Navbox": {"coatings": ["Navbox.css"]},
            }
        ),
    )
    return pages
