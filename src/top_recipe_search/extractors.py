"""Extraction of links and recipe variants from parsed recipe site pages."""

import functools
import logging
import re
from typing import Callable, List, TypeVar

from bs4.element import Comment, NavigableString

from .document_source import Document
from .exceptions import ExtractionError
from .models import RecipeVariant
from .nutrition import parse_nutrition_info

logger = logging.getLogger(__name__)

T = TypeVar("T")

Extractor = Callable[[Document], List[T]]

STAR_RATING_IMAGE_SUFFIX = "_star.gif"
WHITESPACE_PATTERN = re.compile(r"\s+")


def guarded_extraction(extract: Extractor) -> Extractor:
    """Make an extractor non-fatal: any failure yields an empty list for that document."""

    @functools.wraps(extract)
    def wrapper(doc: Document) -> List[T]:
        try:
            logger.debug(f"Extracting data from: {doc.location}")
            return extract(doc)
        except Exception:
            logger.exception(f"Cannot extract data from document {doc.location}, skipping document")
            return []

    return wrapper


def _normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


@guarded_extraction
def extract_table_links(doc: Document) -> List[str]:
    """Return the href of every link placed inside a table, in document order."""
    links = []
    for anchor in doc.soup.select("table a"):
        href = anchor.get("href")
        if href and href.strip():
            links.append(href)
    return links


def _star_rating(doc: Document) -> int:
    # rating images are named like "5_star.gif"
    for img in doc.soup.find_all("img"):
        src = img.get("src", "")
        if src.endswith(STAR_RATING_IMAGE_SUFFIX):
            file_name = src.rsplit("/", 1)[-1]
            return int(file_name[0])
    return 0


def _nutrition_fragments(doc: Document) -> List[str]:
    # every text node of an <i> element is a fragment of its own, so variants
    # separated by <br> stay apart
    fragments = []
    for element in doc.soup.find_all("i"):
        for node in element.find_all(string=True, recursive=False):
            if isinstance(node, NavigableString) and not isinstance(node, Comment):
                # runs of whitespace collapse to one space, the ends are not trimmed
                fragments.append(WHITESPACE_PATTERN.sub(" ", str(node)))
    return fragments


@guarded_extraction
def extract_recipes(doc: Document) -> List[RecipeVariant]:
    """
    Extract all recipe variants from a recipe page.

    A page such as ZESTY CHEDDAR WAFERS lists one nutrition line per serving
    size; each line becomes a separate variant since the variants can have
    different protein to net carb ratios.
    """
    name_element = doc.soup.find("b")
    if name_element is None:
        raise ExtractionError(f"No recipe name found in {doc.location}")
    recipe_name = _normalize_whitespace(name_element.get_text())

    star_rating = _star_rating(doc)

    variants = []
    for fragment in _nutrition_fragments(doc):
        if not fragment.strip():
            continue
        variant = parse_nutrition_info(fragment, recipe_name, doc.location, star_rating)
        if variant is not None:
            variants.append(variant)
    return variants
