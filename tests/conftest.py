from pathlib import Path
from typing import Dict, List, Optional

import pytest

from top_recipe_search.document_source import Document, parse_document
from top_recipe_search.exceptions import FetchError

FIXTURES_DIR = Path(__file__).parent / "fixtures"
BASE_URL = "http://recipe-url"


def load_document(file_name: str) -> Document:
    """Parse one of the HTML pages in tests/fixtures."""
    return parse_document((FIXTURES_DIR / file_name).read_bytes(), BASE_URL)


class FakeDocumentSource:
    """In-memory pages keyed by URL, a None page stands for a load error."""

    def __init__(self, pages: Dict[str, Optional[Document]]):
        self.pages = pages
        self.requested: List[str] = []

    def parse(self, markup, source_label: str) -> Document:
        return parse_document(markup, source_label)

    async def fetch(self, url: str) -> Document:
        self.requested.append(url)
        if url not in self.pages:
            raise AssertionError(f"Unexpected url {url}")
        document = self.pages[url]
        if document is None:
            raise FetchError(url, "connection refused")
        return document


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep local TOP_RECIPE_* settings out of the tests."""
    for name in (
        "TOP_RECIPE_ROOT_URL",
        "TOP_RECIPE_ROOT_SECTION",
        "TOP_RECIPE_WORKERS",
        "TOP_RECIPE_TIMEOUT",
        "TOP_RECIPE_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)


def pytest_collection_modifyitems(items):
    """Add the asyncio marker to coroutine tests that lack it."""
    for item in items:
        if item.get_closest_marker("asyncio") is None:
            if "async" in item.name or "await" in item.name:
                item.add_marker(pytest.mark.asyncio)
