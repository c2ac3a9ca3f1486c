"""Exceptions for the top recipe search package."""


class RecipeSearchError(Exception):
    """Base class for all errors raised by this package."""
    pass


class ConfigurationError(RecipeSearchError):
    """Raised when the search settings are invalid."""
    pass


class FetchError(RecipeSearchError):
    """Raised when a single page cannot be loaded."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot load {url}: {reason}")


class ExtractionError(RecipeSearchError):
    """Raised when a document does not have the structure an extractor expects."""
    pass
