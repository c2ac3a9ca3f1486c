"""
Parsing of free-text nutrition annotations.

Recipe pages carry nutrition info as italic text such as:

    Per 8 Wafers: 235 Calories; 20g Fat; 13g Protein; 3g Carbohydrate; 1.5g Dietary Fiber; 1.5g Net Carbs

Only the protein and net carb amounts are of interest. The text before the
first colon names the variant ("Per 8 Wafers").
"""

import logging
import re
from typing import Optional, Tuple

from .models import RecipeVariant

logger = logging.getLogger(__name__)

# e.g. "16g Protein", the gram unit is optional
PROTEIN_PATTERN = re.compile(r".*[\s;]([\d.]+)g?\s+Protein.*", re.IGNORECASE | re.DOTALL)
# e.g. "1.5g Net Carbs", the gram unit and the "Net" keyword are optional.
# Only the "Carb" prefix is required so "Carbohydrate" matches as well.
NET_CARB_PATTERN = re.compile(r".*[\s;]([\d.]+)g?\s+(Net\s+)?Carb.*", re.IGNORECASE | re.DOTALL)

TRACE_PATTERN = re.compile(r"trace", re.IGNORECASE)


def split_variant(nutrition_info: str) -> Tuple[str, str]:
    """Split "Per Cup: 302 Calories; ..." into ("Per Cup", "302 Calories; ...")."""
    if ":" in nutrition_info:
        variant, body = nutrition_info.split(":", 1)
        return variant.strip(), body.strip()
    # an unlabeled body is kept untrimmed, a leading space separates the first amount
    return "", nutrition_info


def _amount(pattern: re.Pattern, text: str) -> Optional[float]:
    match = pattern.fullmatch(text)
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        # the number class also accepts things like "1.2.3"
        return None


def parse_nutrition_info(
    nutrition_info: str,
    recipe_name: str,
    url: str,
    star_rating: int
) -> Optional[RecipeVariant]:
    """
    Build a recipe variant out of one nutrition annotation.

    Args:
        nutrition_info: A single annotation fragment
        recipe_name: Name of the recipe the annotation belongs to
        url: Location of the recipe page
        star_rating: Star rating of the recipe

    Returns:
        RecipeVariant, or None when the fragment holds no usable protein and net carb amounts
    """
    variant, body = split_variant(nutrition_info)

    # "trace" amounts count as zero, so such variants are never ranked
    body_no_trace = TRACE_PATTERN.sub("0g", body)

    proteins = _amount(PROTEIN_PATTERN, body_no_trace)
    net_carbs = _amount(NET_CARB_PATTERN, body_no_trace)

    if proteins is None or net_carbs is None:
        # not a hard error, some recipe pages have unrelated text in <i> tags
        logger.debug(f"Cannot parse protein and/or net carb data from {url}: {body}, skipping variant")
        return None

    if proteins == 0 or net_carbs == 0:
        logger.debug(f"Skipping {url}: variants with trace protein or trace net carb are not evaluated")
        return None

    return RecipeVariant(
        name=recipe_name,
        url=url,
        variant=variant,
        nutrition_info=body,
        star_rating=star_rating,
        protein_to_net_carb=proteins / net_carbs,
    )
