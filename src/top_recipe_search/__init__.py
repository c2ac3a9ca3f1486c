"""Search of a low-carb recipe site for the best protein to net carb, 5-star recipe."""

from .document_source import Document, HttpDocumentSource, LocalDocumentSource, parse_document
from .exceptions import ExtractionError, FetchError, RecipeSearchError
from .models import RecipeVariant
from .search import TopRecipeSearch, find_top_recipe, select_top_recipe

__all__ = [
    "Document",
    "ExtractionError",
    "FetchError",
    "HttpDocumentSource",
    "LocalDocumentSource",
    "RecipeSearchError",
    "RecipeVariant",
    "TopRecipeSearch",
    "find_top_recipe",
    "parse_document",
    "select_top_recipe",
]
