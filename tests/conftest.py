import copy

import pytest

from sitemap_builder.templates import load_templates

EXAMPLE_CONFIG = {
    "basename": "https://example.com",
    "sitemapindex": {
        "main": {
            "urlset": {
                "/": {"priority": 1.0},
                "/about": {},
            },
        },
    },
}


@pytest.fixture
def example_config():
    return copy.deepcopy(EXAMPLE_CONFIG)


@pytest.fixture(scope="session")
def templates():
    return load_templates()
