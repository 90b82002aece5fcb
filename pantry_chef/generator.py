"""Generate recipes locally from a list of user ingredients.

Three fixed templates (stir fry, salad, soup) are rendered with the user's
ingredients plus a few pantry staples. Quantities and instructions come from
ordered rule lists where the first matching rule wins. Nutrition values are
static per template, not computed from the ingredients.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Tuple

from .errors import NoIngredientsError
from .schemas import Difficulty, GeneratedRecipe, GenerationResponse

logger = logging.getLogger(__name__)

DEFAULT_QUANTITY = "1 cup"

# (keywords, quantity); checked in order against the lowercased name
QUANTITY_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("chicken", "beef", "pork"), "200g"),
    (("fish", "salmon", "tuna"), "150g"),
    (("rice", "pasta", "noodles"), "1 cup"),
    (("onion", "garlic"), "1 medium"),
    (("tomato", "carrot", "bell pepper"), "2 medium"),
    (("broccoli", "spinach", "lettuce"), "1 cup"),
    (("oil", "butter"), "2 tbsp"),
    (("soy sauce", "vinegar", "lemon juice"), "1 tbsp"),
    (("salt", "pepper", "herbs"), "to taste"),
    (("broth", "stock"), "2 cups"),
    (("cheese",), "50g"),
    (("egg",), "2 large"),
    (("milk", "cream"), "1/2 cup"),
)


def ingredient_quantity(ingredient: str) -> str:
    """Display quantity for an ingredient, e.g. "200g" for chicken thighs."""
    name = ingredient.lower()
    for keywords, quantity in QUANTITY_RULES:
        if any(k in name for k in keywords):
            return quantity
    return DEFAULT_QUANTITY


def _second(ingredients: Sequence[str], fallback: str) -> str:
    return ingredients[1] if len(ingredients) > 1 and ingredients[1] else fallback


def _stir_fry_steps(ingredients: Sequence[str]) -> List[str]:
    return [
        "Heat oil in a large wok or pan over high heat",
        f"Add {ingredients[0]} and stir-fry for 2-3 minutes",
        f"Add {_second(ingredients, 'vegetables')} and continue cooking for 3-4 minutes",
        "Add garlic and stir for 30 seconds",
        "Season with soy sauce, salt, and pepper",
        "Cook for 1-2 more minutes until everything is tender",
        "Serve hot over rice or noodles",
    ]


def _salad_steps(ingredients: Sequence[str]) -> List[str]:
    return [
        "Wash and prepare all fresh ingredients",
        "Cut ingredients into bite-sized pieces",
        "Make dressing by whisking olive oil, lemon juice, and salt",
        "Toss all ingredients together in a large bowl",
        "Drizzle with dressing and mix gently",
        "Add fresh herbs and season to taste",
        "Serve immediately",
    ]


def _soup_steps(ingredients: Sequence[str]) -> List[str]:
    return [
        "Heat oil in a large pot over medium heat",
        "Add onion and garlic, cook until softened",
        f"Add {ingredients[0]} and cook for 5 minutes",
        "Pour in vegetable broth and bring to a boil",
        "Reduce heat and simmer for 20-25 minutes",
        "Season with salt, pepper, and herbs",
        "Taste and adjust seasoning as needed",
        "Serve hot with bread or crackers",
    ]


GENERIC_STEPS = (
    "Prepare all ingredients",
    "Heat oil in a pan",
    "Cook ingredients until tender",
    "Season to taste",
    "Serve hot",
)

INSTRUCTION_RULES: Tuple[
    Tuple[Callable[[str], bool], Callable[[Sequence[str]], List[str]]], ...
] = (
    (lambda category: category == "stir_fry", _stir_fry_steps),
    (lambda category: category == "salad", _salad_steps),
    (lambda category: category == "soup", _soup_steps),
)


def generate_instructions(category: str, ingredients: Sequence[str]) -> List[str]:
    for applies, steps in INSTRUCTION_RULES:
        if applies(category):
            return steps(ingredients)
    return list(GENERIC_STEPS)


@dataclass(frozen=True)
class RecipeTemplate:
    category: str
    name: Callable[[Sequence[str]], str]
    description: str
    pantry: Tuple[str, ...]
    cooking_time: int
    calories: int
    protein: int
    carbs: int
    fat: int
    diet_type: Tuple[str, ...]
    image_url: str
    difficulty: Difficulty = Difficulty.easy


TEMPLATES: Tuple[RecipeTemplate, ...] = (
    RecipeTemplate(
        category="stir_fry",
        name=lambda ings: f"{' & '.join(ings[:2])} Stir Fry",
        description="A quick and flavorful stir fry featuring your main ingredients",
        pantry=("oil", "garlic", "soy sauce", "salt", "pepper"),
        cooking_time=20,
        calories=250,
        protein=15,
        carbs=20,
        fat=12,
        diet_type=("healthy", "quick"),
        image_url="https://images.unsplash.com/photo-1603133872878-684f208fb84b?w=500&h=300&fit=crop",
    ),
    RecipeTemplate(
        category="salad",
        name=lambda ings: f"{ings[0]} & {_second(ings, 'Vegetables')} Salad",
        description="A fresh and nutritious salad perfect for any meal",
        pantry=("olive oil", "lemon juice", "salt", "herbs"),
        cooking_time=15,
        calories=180,
        protein=8,
        carbs=15,
        fat=10,
        diet_type=("healthy", "fresh", "vegetarian"),
        image_url="https://images.unsplash.com/photo-1512621776951-a57141f2eefd?w=500&h=300&fit=crop",
    ),
    RecipeTemplate(
        category="soup",
        name=lambda ings: f"Hearty {ings[0]} Soup",
        description="A comforting soup that makes the most of your ingredients",
        pantry=("vegetable broth", "onion", "garlic", "salt", "pepper", "herbs"),
        cooking_time=35,
        calories=220,
        protein=12,
        carbs=25,
        fat=8,
        diet_type=("comforting", "warm", "vegetarian"),
        image_url="https://images.unsplash.com/photo-1547592180-85f173990554?w=500&h=300&fit=crop",
    ),
)


def render_template(
    template: RecipeTemplate,
    user_ingredients: Sequence[str],
    recipe_id: str,
    created_at: Optional[datetime] = None,
) -> GeneratedRecipe:
    ingredients = list(user_ingredients) + list(template.pantry)
    return GeneratedRecipe(
        id=recipe_id,
        name=template.name(user_ingredients),
        description=template.description,
        ingredients=[
            {"name": i, "quantity": ingredient_quantity(i)} for i in ingredients
        ],
        instructions=generate_instructions(template.category, user_ingredients),
        image_url=template.image_url,
        cooking_time=template.cooking_time,
        difficulty=template.difficulty,
        diet_type=list(template.diet_type),
        calories=template.calories,
        protein=template.protein,
        carbs=template.carbs,
        fat=template.fat,
        created_at=created_at,
    )


def generate_recipes(
    user_ingredients: Sequence[str], timestamp: Optional[int] = None
) -> List[GeneratedRecipe]:
    """Render every template for the given ingredients.

    Args:
        user_ingredients: Ingredient names as the user typed them.
        timestamp: Milliseconds since the epoch, used only for ids and
            created_at. Defaults to the current time.

    Returns:
        One recipe per template, in template order.

    Raises:
        NoIngredientsError: If user_ingredients is empty.
    """
    if not user_ingredients:
        raise NoIngredientsError()
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    created_at = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
    return [
        render_template(t, user_ingredients, f"ai-recipe-{timestamp}-{i}", created_at)
        for i, t in enumerate(TEMPLATES)
    ]


def generate_recipe_response(user_ingredients: Sequence[str]) -> GenerationResponse:
    recipes = generate_recipes(user_ingredients)
    logger.info(
        "generated %d recipes from %d ingredient(s)",
        len(recipes), len(user_ingredients),
    )
    return GenerationResponse(recipes=recipes, success=True)
