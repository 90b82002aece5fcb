# No fuzzy matching: exact normalized matches only
from typing import Iterable, Optional, Set


def normalize_ingredient(s: Optional[str]) -> str:
    """Canonical form of an ingredient name used for every comparison.

    Lowercases, trims and drops a single trailing "s". The singular form is
    naive on purpose: "tomatoes" becomes "tomatoe", not "tomato".
    """
    if not s:
        return ""
    w = s.lower().strip()
    if w.endswith("s"):
        w = w[:-1]
    return w


def normalize_all(items: Iterable[Optional[str]]) -> Set[str]:
    return {normalize_ingredient(i) for i in items}


def is_ingredient_match(recipe_ing: Optional[str], have_set: Set[str]) -> bool:
    """Return True if the normalized recipe ingredient is present in have_set.

    have_set must already hold normalized names (see normalize_all). Only
    exact equality counts, substrings never match.
    """
    return normalize_ingredient(recipe_ing) in have_set
