"""Pantry Chef - recipe suggestions from the ingredients you have."""

__version__ = "0.1.0"

from .generator import generate_recipes
from .matching import match_ingredients, rank_matches, score, search_recipes
from .normalize import normalize_ingredient
from .substitutions import (
    DEFAULT_SUBSTITUTIONS,
    SubstitutionResolver,
    resolve_substitutions,
)

__all__ = [
    "normalize_ingredient",
    "match_ingredients",
    "score",
    "rank_matches",
    "search_recipes",
    "SubstitutionResolver",
    "DEFAULT_SUBSTITUTIONS",
    "resolve_substitutions",
    "generate_recipes",
]
