"""Substitution suggestions for missing recipe ingredients.

A substitution is only suggested when the user already holds the alternative,
so the table is always cross-referenced against the user's ingredients.
"""

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from .normalize import normalize_all, normalize_ingredient
from .schemas import Substitution

SubstitutionTable = Mapping[str, Tuple[str, ...]]


def make_table(entries: Mapping[str, Iterable[str]]) -> SubstitutionTable:
    """Build a read-only table keyed by normalized ingredient name.

    Alternatives keep their declared order and casing.
    """
    return MappingProxyType(
        {normalize_ingredient(k): tuple(v) for k, v in entries.items()}
    )


DEFAULT_SUBSTITUTIONS: SubstitutionTable = make_table({
    "butter": ["olive oil", "coconut oil", "margarine"],
    "milk": ["almond milk", "soy milk", "coconut milk"],
    "egg": ["flax egg", "chia egg", "applesauce"],
    "flour": ["almond flour", "coconut flour", "gluten-free flour"],
    "sugar": ["honey", "maple syrup", "stevia"],
    "sour cream": ["greek yogurt", "coconut cream"],
    "cream": ["coconut cream", "cashew cream"],
    "chicken": ["tofu", "tempeh", "seitan"],
    "beef": ["mushrooms", "lentils", "beyond meat"],
    "cheese": ["nutritional yeast", "cashew cheese", "vegan cheese"],
})


class SubstitutionResolver:
    def __init__(self, table: Optional[Mapping[str, Iterable[str]]] = None):
        if table is None:
            self.table = DEFAULT_SUBSTITUTIONS
        else:
            self.table = make_table(table)

    def alternatives(self, ingredient: str) -> Tuple[str, ...]:
        return self.table.get(normalize_ingredient(ingredient), ())

    def resolve(
        self, missing: Sequence[str], user_ingredients: Iterable[str]
    ) -> List[Substitution]:
        """Pair each missing ingredient with every alternative the user holds.

        A missing ingredient can yield several pairs; order follows the table.
        Ingredients absent from the table produce nothing.
        """
        have = normalize_all(user_ingredients)
        substitutions = []
        for name in missing:
            for sub in self.alternatives(name):
                if normalize_ingredient(sub) in have:
                    substitutions.append(
                        Substitution(missing=name, substitute=sub)
                    )
        return substitutions


_default_resolver = SubstitutionResolver()


def resolve_substitutions(
    missing: Sequence[str], user_ingredients: Iterable[str]
) -> List[Substitution]:
    return _default_resolver.resolve(missing, user_ingredients)
