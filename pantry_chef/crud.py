import json
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from . import models, schemas
from .errors import DuplicateRecipeError, FavoriteExistsError

logger = logging.getLogger(__name__)


def _dump(value) -> str:
    return json.dumps(value or [])


def _load(value) -> list:
    try:
        return json.loads(value or "[]")
    except ValueError:
        logger.warning("ignoring malformed JSON column value %r", value)
        return []


def to_schema(db_recipe: models.Recipe) -> schemas.Recipe:
    return schemas.Recipe(
        id=db_recipe.id,
        name=db_recipe.name,
        description=db_recipe.description or "",
        ingredients=_load(db_recipe.ingredients),
        instructions=_load(db_recipe.instructions),
        image_url=db_recipe.image_url or "",
        cooking_time=db_recipe.cooking_time or 0,
        difficulty=db_recipe.difficulty or schemas.Difficulty.easy,
        diet_type=_load(db_recipe.diet_type),
        calories=db_recipe.calories or 0,
        protein=db_recipe.protein or 0,
        carbs=db_recipe.carbs or 0,
        fat=db_recipe.fat or 0,
        created_at=db_recipe.created_at,
    )


def _apply_fields(db_recipe: models.Recipe, recipe: schemas.RecipeCreate):
    db_recipe.name = recipe.name
    db_recipe.description = recipe.description
    db_recipe.ingredients = _dump([i.model_dump() for i in recipe.ingredients])
    db_recipe.instructions = _dump(recipe.instructions)
    db_recipe.image_url = recipe.image_url
    db_recipe.cooking_time = recipe.cooking_time
    db_recipe.difficulty = recipe.difficulty.value
    db_recipe.diet_type = _dump(recipe.diet_type)
    db_recipe.calories = recipe.calories
    db_recipe.protein = recipe.protein
    db_recipe.carbs = recipe.carbs
    db_recipe.fat = recipe.fat


def get_recipe(db: Session, recipe_id: str):
    return db.query(models.Recipe).filter(models.Recipe.id == recipe_id).first()


def get_recipe_by_name(db: Session, name: str):
    return db.query(models.Recipe).filter(models.Recipe.name == name).first()


def _search(db: Session, q: Optional[str] = None):
    query = db.query(models.Recipe)
    if q:
        pattern = f"%{q}%"
        query = query.filter(
            or_(
                models.Recipe.name.ilike(pattern),
                models.Recipe.description.ilike(pattern),
            )
        )
    return query


def get_recipes(db: Session, skip: int = 0, limit: int = 100, q: Optional[str] = None):
    return (
        _search(db, q).order_by(models.Recipe.name).offset(skip).limit(limit).all()
    )


def count_recipes(db: Session, q: Optional[str] = None) -> int:
    return _search(db, q).count()


def query_recipes(db: Session, filters: schemas.RecipeFilters) -> List[schemas.Recipe]:
    """Recipes passing the store-side filters, ordered by name.

    Difficulty and maximum cooking time are applied in SQL. Diet types are
    JSON-encoded, so the overlap check runs on the decoded tags.
    """
    query = db.query(models.Recipe)
    if filters.difficulty:
        query = query.filter(models.Recipe.difficulty == filters.difficulty.value)
    if filters.max_cooking_time:
        query = query.filter(models.Recipe.cooking_time <= filters.max_cooking_time)
    recipes = [to_schema(r) for r in query.order_by(models.Recipe.name).all()]
    if filters.diet_type:
        wanted = set(filters.diet_type)
        recipes = [r for r in recipes if wanted.intersection(r.diet_type)]
    logger.debug("store returned %d recipe(s) for %s", len(recipes), filters)
    return recipes


def create_recipe(db: Session, recipe: schemas.RecipeCreate):
    if get_recipe_by_name(db, recipe.name):
        raise DuplicateRecipeError(recipe.name)
    db_recipe = models.Recipe()
    _apply_fields(db_recipe, recipe)
    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def update_recipe(db: Session, recipe_id: str, recipe: schemas.RecipeCreate):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return None
    other = get_recipe_by_name(db, recipe.name)
    if other and other.id != recipe_id:
        raise DuplicateRecipeError(recipe.name)
    _apply_fields(db_recipe, recipe)
    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def delete_recipe(db: Session, recipe_id: str):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return False
    # SQLite does not enforce the cascade unless foreign keys are switched on
    db.query(models.UserFavorite).filter(
        models.UserFavorite.recipe_id == recipe_id
    ).delete()
    db.delete(db_recipe)
    db.commit()
    return True


def _favorite_query(db: Session, user_id: str, recipe_id: str):
    return db.query(models.UserFavorite).filter(
        models.UserFavorite.user_id == user_id,
        models.UserFavorite.recipe_id == recipe_id,
    )


def get_favorites(db: Session, user_id: str):
    return (
        db.query(models.UserFavorite)
        .filter(models.UserFavorite.user_id == user_id)
        .order_by(models.UserFavorite.id)
        .all()
    )


def is_favorite(db: Session, user_id: str, recipe_id: str) -> bool:
    return _favorite_query(db, user_id, recipe_id).first() is not None


def add_favorite(db: Session, user_id: str, recipe_id: str, rating: Optional[int] = None):
    if is_favorite(db, user_id, recipe_id):
        raise FavoriteExistsError(user_id, recipe_id)
    favorite = models.UserFavorite(user_id=user_id, recipe_id=recipe_id, rating=rating)
    db.add(favorite)
    db.commit()
    db.refresh(favorite)
    return favorite


def remove_favorite(db: Session, user_id: str, recipe_id: str) -> bool:
    favorite = _favorite_query(db, user_id, recipe_id).first()
    if not favorite:
        return False
    db.delete(favorite)
    db.commit()
    return True


def update_rating(db: Session, user_id: str, recipe_id: str, rating: int):
    favorite = _favorite_query(db, user_id, recipe_id).first()
    if not favorite:
        return None
    favorite.rating = rating
    db.add(favorite)
    db.commit()
    db.refresh(favorite)
    return favorite


def get_rating(db: Session, user_id: str, recipe_id: str) -> Optional[int]:
    favorite = _favorite_query(db, user_id, recipe_id).first()
    return favorite.rating if favorite else None
