import json
from pathlib import Path
from typing import List

from pydantic import TypeAdapter

from .schemas import Recipe

_recipe_list = TypeAdapter(List[Recipe])


def load_recipes(path) -> List[Recipe]:
    """Load recipes from a JSON file.

    Entries may give ingredients either as plain strings or as
    {"name": ..., "quantity": ...} objects; both are read as IngredientRef.

    Args:
        path (str or Path): Path to the JSON file.

    Returns:
        list: Recipe models, empty if the file does not exist.
    """
    p = Path(path)
    if not p.exists():
        return []
    with p.open("r", encoding="utf-8") as f:
        return _recipe_list.validate_python(json.load(f))
