from pydantic import BaseModel, ConfigDict


class RecipeVariant(BaseModel):
    """One ratio-bearing nutrition reading of a recipe page.

    A single page can yield several variants, e.g. "Per 4 Wafers" and
    "Per 8 Wafers", each with its own protein to net carb ratio.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    variant: str  # e.g. "Per Cup", empty when the annotation has no label
    nutrition_info: str  # shown to the user, keeps "trace" untouched
    star_rating: int
    protein_to_net_carb: float
