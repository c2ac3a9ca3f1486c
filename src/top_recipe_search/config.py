"""Settings for a top recipe search run."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError

# Load environment variables
load_dotenv()

DEFAULT_ROOT_URL = "https://www.genaw.com/lowcarb/"
DEFAULT_ROOT_SECTION = "recipes.html"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _default_workers() -> int:
    return os.cpu_count() or 4


class SearchConfig(BaseModel):
    """Top-level settings that control crawling."""
    root_url: str = DEFAULT_ROOT_URL
    root_section: str = DEFAULT_ROOT_SECTION
    max_workers: int = Field(default_factory=_default_workers, ge=1)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, **overrides) -> "SearchConfig":
        """
        Build settings from TOP_RECIPE_* environment variables.

        Args:
            **overrides: Values taking precedence over the environment, None values are ignored

        Returns:
            Validated SearchConfig

        Raises:
            ConfigurationError: If a value is missing the expected type or range
        """
        env_values = {
            "root_url": os.getenv("TOP_RECIPE_ROOT_URL"),
            "root_section": os.getenv("TOP_RECIPE_ROOT_SECTION"),
            "max_workers": os.getenv("TOP_RECIPE_WORKERS"),
            "timeout": os.getenv("TOP_RECIPE_TIMEOUT"),
            "user_agent": os.getenv("TOP_RECIPE_USER_AGENT"),
        }
        env_values.update(overrides)
        values = {key: value for key, value in env_values.items() if value is not None}

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid search settings: {e}") from e


def load_config(
    root_url: Optional[str] = None,
    root_section: Optional[str] = None,
    max_workers: Optional[int] = None,
    timeout: Optional[float] = None,
) -> SearchConfig:
    """Load settings from the environment, letting explicit arguments win."""
    return SearchConfig.from_env(
        root_url=root_url,
        root_section=root_section,
        max_workers=max_workers,
        timeout=timeout,
    )
