import argparse
import logging
from pathlib import Path

from .generator import generate_recipes
from .matching import search_recipes
from .recipes import load_recipes

DEFAULT_DATA_FILE = Path(__file__).resolve().parent.parent / "data" / "recipes.json"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pantry-chef",
        description="Suggest recipes for the ingredients you have.",
    )
    parser.add_argument("ingredients", nargs="+", help="ingredients on hand")
    parser.add_argument(
        "--data", default=str(DEFAULT_DATA_FILE), help="recipes JSON file"
    )
    parser.add_argument(
        "--generate", action="store_true",
        help="generate recipes from templates instead of searching",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.generate:
        for r in generate_recipes(args.ingredients):
            print(f"- {r.name} ({r.cooking_time} min)")
            for ing in r.ingredients:
                print(f"    {ing.quantity} {ing.name}")
        return 0

    recipes = load_recipes(args.data)
    matches = search_recipes(recipes, args.ingredients)
    print(f"{len(matches)} of {len(recipes)} recipe(s) match.")
    for m in matches:
        print(f"- {m.name}: {m.match_score:.0f}%")
        if m.missing_ingredients:
            print(f"    missing: {', '.join(m.missing_ingredients)}")
        for s in m.substitutions:
            print(f"    use {s.substitute} instead of {s.missing}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
