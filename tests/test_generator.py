# flake8: noqa
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import pytest

from pantry_chef.errors import NoIngredientsError
from pantry_chef.generator import (
    GENERIC_STEPS,
    generate_instructions,
    generate_recipe_response,
    generate_recipes,
    ingredient_quantity,
)


def names(recipe):
    return [i.name for i in recipe.ingredients]


def test_generates_three_recipes():
    recipes = generate_recipes(["chicken", "broccoli"], timestamp=1700000000000)
    assert len(recipes) == 3
    assert [r.name for r in recipes] == [
        "chicken & broccoli Stir Fry",
        "chicken & broccoli Salad",
        "Hearty chicken Soup",
    ]
    assert [r.id for r in recipes] == [
        "ai-recipe-1700000000000-0",
        "ai-recipe-1700000000000-1",
        "ai-recipe-1700000000000-2",
    ]


def test_pantry_items_are_appended():
    stir_fry, salad, soup = generate_recipes(["chicken", "broccoli"])
    assert names(stir_fry) == ["chicken", "broccoli", "oil", "garlic", "soy sauce", "salt", "pepper"]
    assert names(salad) == ["chicken", "broccoli", "olive oil", "lemon juice", "salt", "herbs"]
    assert names(soup) == [
        "chicken", "broccoli", "vegetable broth", "onion", "garlic", "salt", "pepper", "herbs",
    ]


def test_single_ingredient_names():
    stir_fry, salad, soup = generate_recipes(["tofu"])
    assert stir_fry.name == "tofu Stir Fry"
    assert salad.name == "tofu & Vegetables Salad"
    assert soup.name == "Hearty tofu Soup"
    # the second stir fry step falls back too
    assert stir_fry.instructions[2] == "Add vegetables and continue cooking for 3-4 minutes"


def test_empty_ingredients_fail():
    with pytest.raises(NoIngredientsError):
        generate_recipes([])
    with pytest.raises(ValueError):
        generate_recipe_response([])


def test_content_does_not_depend_on_timestamp():
    a = generate_recipes(["salmon", "rice"], timestamp=1)
    b = generate_recipes(["salmon", "rice"], timestamp=2)
    assert [r.model_dump(exclude={"id", "created_at"}) for r in a] == [
        r.model_dump(exclude={"id", "created_at"}) for r in b
    ]


def test_static_template_values():
    stir_fry, salad, soup = generate_recipes(["egg"])
    assert (stir_fry.cooking_time, stir_fry.calories, stir_fry.diet_type) == (20, 250, ["healthy", "quick"])
    assert (salad.cooking_time, salad.calories) == (15, 180)
    assert (soup.cooking_time, soup.protein, soup.carbs, soup.fat) == (35, 12, 25, 8)
    assert all(r.difficulty == "easy" for r in (stir_fry, salad, soup))


@pytest.mark.parametrize(
    "ingredient, quantity",
    [
        ("Chicken breast", "200g"),
        ("pork belly", "200g"),
        ("Salmon", "150g"),
        ("noodles", "1 cup"),
        ("red onion", "1 medium"),
        ("bell pepper", "2 medium"),
        ("spinach", "1 cup"),
        ("olive oil", "2 tbsp"),
        ("soy sauce", "1 tbsp"),
        ("salt", "to taste"),
        ("black pepper", "to taste"),
        ("vegetable broth", "2 cups"),
        ("cheddar cheese", "50g"),
        ("eggs", "2 large"),
        ("cream", "1/2 cup"),
        ("quinoa", "1 cup"),
    ],
)
def test_ingredient_quantity(ingredient, quantity):
    assert ingredient_quantity(ingredient) == quantity


def test_quantity_first_rule_wins():
    # "chicken broth" hits the meat rule before the broth rule
    assert ingredient_quantity("chicken broth") == "200g"
    # "buttermilk" hits oil/butter before milk
    assert ingredient_quantity("buttermilk") == "2 tbsp"


def test_generated_quantities_match_rules():
    stir_fry = generate_recipes(["beef", "carrot"])[0]
    quantities = {i.name: i.quantity for i in stir_fry.ingredients}
    assert quantities["beef"] == "200g"
    assert quantities["carrot"] == "2 medium"
    assert quantities["salt"] == "to taste"


def test_instructions_interpolate_ingredients():
    stir_fry, salad, soup = generate_recipes(["shrimp", "peas"])
    assert stir_fry.instructions[1] == "Add shrimp and stir-fry for 2-3 minutes"
    assert stir_fry.instructions[2] == "Add peas and continue cooking for 3-4 minutes"
    assert len(salad.instructions) == 7
    assert soup.instructions[2] == "Add shrimp and cook for 5 minutes"
    assert len(soup.instructions) == 8


def test_unknown_category_uses_generic_steps():
    steps = generate_instructions("casserole", ["potato"])
    assert steps == list(GENERIC_STEPS)
    assert len(steps) == 5


def test_category_not_name_selects_instructions():
    # an ingredient called "Salad" must not turn the soup into a salad
    soup = generate_recipes(["Salad"])[2]
    assert soup.name == "Hearty Salad Soup"
    assert soup.instructions[0] == "Heat oil in a large pot over medium heat"


def test_generate_recipe_response():
    response = generate_recipe_response(["chicken", "broccoli"])
    assert response.success is True
    assert response.error is None
    assert len(response.recipes) == 3


def test_pantry_items_never_fill_ingredient_slots_in_steps():
    stir_fry, _, soup = generate_recipes(["tofu"])
    # "oil" follows "tofu" in the ingredient list but is not a user ingredient
    assert "Add oil and continue cooking for 3-4 minutes" not in stir_fry.instructions
    assert soup.instructions[2] == "Add tofu and cook for 5 minutes"
    assert generate_instructions("stir_fry", ["tofu"])[2] == (
        "Add vegetables and continue cooking for 3-4 minutes"
    )
