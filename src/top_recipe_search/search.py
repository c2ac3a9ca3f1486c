"""
Crawl of the recipe site and selection of the top recipe.

The site is a tree: category pages list links to sub-category or recipe pages
inside tables, recipe pages have no such links. The tree is assumed to be
acyclic, pages are neither de-duplicated nor checked for cycles.
"""

import asyncio
import logging
import threading
from typing import Iterable, List, Optional

from .config import SearchConfig, load_config
from .document_source import Document, DocumentSource, HttpDocumentSource
from .exceptions import FetchError
from .extractors import Extractor, extract_recipes, extract_table_links
from .models import RecipeVariant

logger = logging.getLogger(__name__)

TOP_STAR_RATING = 5
PROGRESS_LOG_INTERVAL = 50


class PageCounter:
    """Thread-safe count of loaded pages."""

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        """Add one and return the new count."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


def select_top_recipe(recipes: Iterable[RecipeVariant]) -> Optional[RecipeVariant]:
    """Return the 5-star variant with the highest protein to net carb ratio, first one wins ties."""
    top = None
    for recipe in recipes:
        if recipe.star_rating != TOP_STAR_RATING:
            continue
        if top is None or recipe.protein_to_net_carb > top.protein_to_net_carb:
            top = recipe
    return top


class CrawlRun:
    """State of a single crawl: the loaded page count and the worker pool."""

    def __init__(self, max_workers: int):
        self.loaded_pages = PageCounter()
        self.workers = asyncio.Semaphore(max_workers)


class TopRecipeSearch:
    """Search over the recipe site, each call crawls with state of its own."""

    def __init__(
        self,
        document_source: DocumentSource,
        link_extractor: Extractor = extract_table_links,
        recipe_extractor: Extractor = extract_recipes,
        max_workers: Optional[int] = None
    ):
        """
        Initialize the search.

        Args:
            document_source: Source used to load every page
            link_extractor: Returns the sub-page links of a document
            recipe_extractor: Returns the recipe variants of a leaf document
            max_workers: Maximum number of pages loaded at the same time, per crawl
        """
        self.document_source = document_source
        self.link_extractor = link_extractor
        self.recipe_extractor = recipe_extractor
        self.max_workers = max_workers or SearchConfig().max_workers
        # counter of the most recently started crawl
        self.loaded_pages = PageCounter()

    def _new_run(self) -> CrawlRun:
        run = CrawlRun(self.max_workers)
        self.loaded_pages = run.loaded_pages
        return run

    async def find_top_recipe(self, root_url: str, root_section: str) -> Optional[RecipeVariant]:
        """
        Crawl the site from its root page and pick the top recipe.

        Args:
            root_url: Base URL every link is resolved against
            root_section: Link of the root page, relative to root_url

        Returns:
            The best 5-star recipe variant, or None if no variant qualifies
        """
        logger.info("Starting top recipe search")
        run = self._new_run()

        recipes = await self._crawl(run, root_url, root_section)
        top_recipe = select_top_recipe(recipes)

        logger.info(f"Finished, number of loaded pages: {run.loaded_pages.value}")
        return top_recipe

    async def _load_document(self, run: CrawlRun, url: str) -> Optional[Document]:
        async with run.workers:
            run.loaded_pages.increment()
            try:
                return await self.document_source.fetch(url)
            except FetchError as e:
                logger.error(f"Cannot load {url}, skipping document: {e.reason}")
                return None

    async def crawl(self, base_url: str, link: str) -> List[RecipeVariant]:
        """
        Collect the recipe variants of a page and of everything below it.

        Args:
            base_url: Base URL every link is resolved against
            link: Link of the page to start from, relative to base_url

        Returns:
            All variants found, in no particular order
        """
        return await self._crawl(self._new_run(), base_url, link)

    async def _crawl(self, run: CrawlRun, base_url: str, link: str) -> List[RecipeVariant]:
        document = await self._load_document(run, base_url + link)
        # no data to process when the document cannot be loaded
        if document is None:
            return []

        loaded = run.loaded_pages.value
        if loaded % PROGRESS_LOG_INTERVAL == 0:
            logger.info(f"Already visited {loaded} pages and running")

        # a page links either to sub-category pages or recipe pages, or is a recipe page itself
        links = self.link_extractor(document)
        if not links:
            return self.recipe_extractor(document)

        results = await asyncio.gather(*(self._crawl(run, base_url, sub_link) for sub_link in links))
        return [recipe for child_recipes in results for recipe in child_recipes]


async def find_top_recipe(
    root_url: Optional[str] = None,
    root_section: Optional[str] = None,
    config: Optional[SearchConfig] = None,
    document_source: Optional[DocumentSource] = None
) -> Optional[RecipeVariant]:
    """
    Run a complete search with settings taken from the environment.

    Args:
        root_url: Overrides the configured root URL
        root_section: Overrides the configured root section
        config: Optional settings, loaded from the environment when omitted
        document_source: Optional source, an HTTP source is created (and closed) when omitted

    Returns:
        The best 5-star recipe variant, or None if no variant qualifies
    """
    config = config or load_config()
    root_url = root_url or config.root_url
    root_section = root_section or config.root_section

    if document_source is not None:
        search = TopRecipeSearch(document_source, max_workers=config.max_workers)
        return await search.find_top_recipe(root_url, root_section)

    async with HttpDocumentSource(config) as source:
        search = TopRecipeSearch(source, max_workers=config.max_workers)
        return await search.find_top_recipe(root_url, root_section)
