"""Match recipes against the ingredients a user has on hand.

Every recipe is partitioned into matched and missing ingredients by exact
normalized equality, scored as the matched percentage, and only recipes
scoring strictly above the threshold are returned, best first.
"""

import logging
from typing import Iterable, List, NamedTuple, Optional, Sequence

from .normalize import is_ingredient_match, normalize_all
from .schemas import Recipe, RecipeMatch
from .substitutions import SubstitutionResolver

logger = logging.getLogger(__name__)

MATCH_THRESHOLD = 50.0


class IngredientPartition(NamedTuple):
    matched: List[str]
    missing: List[str]


def match_ingredients(
    recipe_ingredient_names: Iterable[Optional[str]],
    user_ingredients: Iterable[Optional[str]],
) -> IngredientPartition:
    """Split recipe ingredient names into those the user has and the rest.

    Nameless entries are skipped. Names keep the recipe's casing and order.
    """
    have = normalize_all(user_ingredients)
    matched, missing = [], []
    for name in recipe_ingredient_names:
        if not name:
            continue
        if is_ingredient_match(name, have):
            matched.append(name)
        else:
            missing.append(name)
    return IngredientPartition(matched, missing)


def score(matched_count: int, total_count: int) -> float:
    if total_count <= 0:
        return 0.0
    return matched_count / total_count * 100


def rank_matches(
    matches: Iterable[RecipeMatch], threshold: float = MATCH_THRESHOLD
) -> List[RecipeMatch]:
    # sorted() is stable, so equal scores keep the store's order
    kept = [m for m in matches if m.match_score > threshold]
    return sorted(kept, key=lambda m: m.match_score, reverse=True)


def build_match(
    recipe: Recipe,
    user_ingredients: Sequence[str],
    resolver: Optional[SubstitutionResolver] = None,
) -> RecipeMatch:
    if resolver is None:
        resolver = SubstitutionResolver()
    matched, missing = match_ingredients(
        recipe.ingredient_names(), user_ingredients
    )
    match_score = score(len(matched), len(matched) + len(missing))
    logger.debug(
        "recipe %s: %d matched, %d missing, score %.1f",
        recipe.id, len(matched), len(missing), match_score,
    )
    return RecipeMatch(
        **recipe.model_dump(include=set(Recipe.model_fields)),
        match_score=match_score,
        matched_ingredients=matched,
        missing_ingredients=missing,
        substitutions=resolver.resolve(missing, user_ingredients),
    )


def search_recipes(
    recipes: Iterable[Recipe],
    user_ingredients: Sequence[str],
    resolver: Optional[SubstitutionResolver] = None,
) -> List[RecipeMatch]:
    """Rank an already filtered recipe collection against user ingredients.

    Args:
        recipes: Candidate recipes in store order.
        user_ingredients: Free-text ingredient names, not deduplicated.
        resolver: Substitution lookup; the default table when omitted.

    Returns:
        Matches scoring above MATCH_THRESHOLD, highest score first.
    """
    if resolver is None:
        resolver = SubstitutionResolver()
    user_ingredients = list(user_ingredients)
    matches = [build_match(r, user_ingredients, resolver) for r in recipes]
    ranked = rank_matches(matches)
    logger.info(
        "ranked %d of %d recipes for %d ingredient(s)",
        len(ranked), len(matches), len(user_ingredients),
    )
    return ranked
