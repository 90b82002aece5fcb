import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))  # noqa: E402

from pantry_chef import crud, schemas
from pantry_chef.db import SessionLocal, init_db
from pantry_chef.recipes import load_recipes


def main():
    init_db()
    p = Path(__file__).resolve().parents[1] / 'data' / 'recipes.json'
    if not p.exists():
        print('data/recipes.json not found')
        return
    db = SessionLocal()
    added = 0
    try:
        for r in load_recipes(p):
            if crud.get_recipe_by_name(db, r.name):
                continue
            crud.create_recipe(
                db, schemas.RecipeCreate(**r.model_dump(exclude={'id', 'created_at'}))
            )
            added += 1
    finally:
        db.close()
    print(f'Imported {added} recipes')


if __name__ == '__main__':
    main()
