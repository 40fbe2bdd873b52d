from __future__ import annotations

import json

import pytest

from coatings.cache.repository import ApplicationRepository
from coatings.config import CoatingsConfig
from coatings.web.app import create_app
from tests.conftest import save_applications, save_css


@pytest.fixture
def site(pages):
    pages.save("Template:Infobox", "{{{1}}}")
    save_css(pages, "Style:Base.css", "body{margin:0}")
    save_css(pages, "Style:Infobox.css", ".infobox{}")
    save_applications(
        pages,
        json.dumps(
            {
                "*": {"coatings": ["Base.css"]},
                "Infobox": {
                    "coatings": ["Infobox.css"],
                    "preload": [
                        {"href": "/fonts/a.woff2", "as": "font", "type": "font/woff2"},
                        {"href": "/img/logo.png", "as": "image"},
                    ],
                },
            }
        ),
    )
    return pages


@pytest.fixture
def web_config():
    return CoatingsConfig(skins=("vector",))


@pytest.fixture
def app(site, cache_store, resolver, web_config, clock):
    repository = ApplicationRepository(
        site, cache_store, resolver=resolver, config=web_config, clock=clock, sleep=clock.sleep
    )
    application = create_app(repository=repository, config=web_config)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()
