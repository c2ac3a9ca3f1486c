#!/usr/bin/env python3
"""
Command-line interface for top-recipe-search.
Crawls the low-carb recipe site and prints the 5-star recipe with the best protein to net carb ratio.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from .config import load_config
from .document_source import LocalDocumentSource
from .exceptions import RecipeSearchError
from .models import RecipeVariant
from .search import TopRecipeSearch, find_top_recipe

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()]
    )

    # Set default log level for all loggers
    logging.getLogger().setLevel(log_level)

    # Reduce verbosity of external libraries
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find the 5-star recipe with the highest protein to net carb ratio."
    )
    parser.add_argument("--root-url", help="Base URL every recipe link is resolved against")
    parser.add_argument("--root-section", help="Link of the recipe index page, relative to the root URL")
    parser.add_argument("--workers", type=int, help="Maximum number of pages loaded at the same time")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument(
        "--offline-dir",
        type=Path,
        help="Read pages from this directory instead of the network",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def print_top_recipe(recipe: RecipeVariant, console: Optional[Console] = None) -> None:
    """Render the winning recipe as a table."""
    console = console or Console()
    table = Table(title="Top Protein to Net Carb, 5-star recipe", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Name", recipe.name)
    table.add_row("URL", recipe.url)
    nutrition = f"{recipe.variant}: {recipe.nutrition_info}" if recipe.variant else recipe.nutrition_info
    table.add_row("Nutrition info", nutrition)
    table.add_row("Protein to Net Carb Ratio", f"{recipe.protein_to_net_carb:.2f}")
    console.print(table)


async def main_async(args: argparse.Namespace) -> int:
    """Asynchronous main function running the search."""
    try:
        config = load_config(
            root_url=args.root_url,
            root_section=args.root_section,
            max_workers=args.workers,
            timeout=args.timeout,
        )
    except RecipeSearchError as e:
        logger.error(str(e))
        return 2

    if args.offline_dir:
        logger.info(f"Reading pages from {args.offline_dir}")
        search = TopRecipeSearch(LocalDocumentSource(args.offline_dir), max_workers=config.max_workers)
        top_recipe = await search.find_top_recipe(config.root_url, config.root_section)
    else:
        top_recipe = await find_top_recipe(config=config)

    if top_recipe is None:
        logger.error("No recipe with given criteria found")
        return 1

    print_top_recipe(top_recipe)
    return 0


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    setup_logging(args.verbose)
    return asyncio.run(main_async(args))


if __name__ == "__main__":
    sys.exit(main())
