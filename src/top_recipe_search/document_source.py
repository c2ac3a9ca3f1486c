import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Union
from urllib.parse import unquote, urlparse

import httpx
from bs4 import BeautifulSoup

from .config import SearchConfig
from .exceptions import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """Parsed page markup together with the location it was loaded from."""
    location: str
    soup: BeautifulSoup


def parse_document(markup: Union[bytes, str], source_label: str) -> Document:
    """
    Parse raw markup into a Document.

    Args:
        markup: HTML as bytes (encoding is sniffed) or text
        source_label: URL or any identifier reported as the document location

    Returns:
        Document wrapping the parsed tree
    """
    return Document(location=source_label, soup=BeautifulSoup(markup, "html.parser"))


class DocumentSource(Protocol):
    """Anything able to turn a URL into a parsed Document."""

    async def fetch(self, url: str) -> Document:
        ...

    def parse(self, markup: Union[bytes, str], source_label: str) -> Document:
        ...


class HttpDocumentSource:
    """Loads recipe pages over HTTP."""

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the document source.

        Args:
            config: Optional settings, used for the timeout and user agent
            client: Optional pre-built client, mostly useful for tests
        """
        config = config or SearchConfig()
        self.headers = {
            "User-Agent": config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9"
        }
        self.client = client or httpx.AsyncClient(
            headers=self.headers,
            follow_redirects=True,
            timeout=config.timeout
        )

    def parse(self, markup: Union[bytes, str], source_label: str) -> Document:
        return parse_document(markup, source_label)

    async def fetch(self, url: str) -> Document:
        """
        Fetch and parse a single page.

        Args:
            url: The URL to load

        Returns:
            Document located at the final (post-redirect) URL

        Raises:
            FetchError: If the URL is invalid, the page cannot be fetched or the server answers with an error status
        """
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(url, str(e)) from e

        return self.parse(response.content, str(response.url))

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self):
        """Support for async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Clean up resources."""
        await self.aclose()


class LocalDocumentSource:
    """Serves pages from a directory, mapping the URL path onto file names.

    ``http://any-host/lowcarb/recipes.html`` is read from
    ``<root>/lowcarb/recipes.html``.
    """

    def __init__(self, root: Path):
        self.root = Path(root).resolve()

    def parse(self, markup: Union[bytes, str], source_label: str) -> Document:
        return parse_document(markup, source_label)

    def _path_for(self, url: str) -> Path:
        relative = unquote(urlparse(url).path).lstrip("/")
        path = (self.root / relative).resolve()
        if path != self.root and self.root not in path.parents:
            raise FetchError(url, "path escapes the offline directory")
        return path

    async def fetch(self, url: str) -> Document:
        path = self._path_for(url)
        try:
            markup = path.read_bytes()
        except OSError as e:
            raise FetchError(url, str(e)) from e

        logger.debug(f"Loaded {url} from {path}")
        return self.parse(markup, url)
