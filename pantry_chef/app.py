import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from . import crud, schemas
from .db import SessionLocal, init_db
from .errors import DuplicateRecipeError, FavoriteExistsError, NoIngredientsError
from .generator import generate_recipe_response
from .matching import search_recipes
from .substitutions import SubstitutionResolver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize DB once at startup
    init_db()
    yield


app = FastAPI(title="Pantry Chef", lifespan=lifespan)

# Allow CORS for API clients (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


_resolver = SubstitutionResolver()


def get_resolver() -> SubstitutionResolver:
    return _resolver


def get_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    # Authentication lives outside this service; callers pass their user id.
    return x_user_id or "anonymous"


def _link_header(request: Request, page: int, page_size: int, total: int) -> str:
    links = []
    if page > 1:
        url = request.url.include_query_params(page=page - 1, page_size=page_size)
        links.append(f'<{url}>; rel="prev"')
    if page * page_size < total:
        url = request.url.include_query_params(page=page + 1, page_size=page_size)
        links.append(f'<{url}>; rel="next"')
    return ", ".join(links)


@app.get("/api/recipes")
def list_recipes(
    request: Request,
    response: Response,
    q: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
    db: Session = Depends(get_db),
):
    if page < 1 or page_size < 1:
        raise HTTPException(status_code=400, detail="page and page_size must be positive")
    total = crud.count_recipes(db, q)
    rows = crud.get_recipes(db, skip=(page - 1) * page_size, limit=page_size, q=q)
    link = _link_header(request, page, page_size, total)
    if link:
        response.headers["Link"] = link
    return {
        "items": [crud.to_schema(r).model_dump(mode="json") for r in rows],
        "total": total,
        "page": page,
        "page_size": page_size,
    }


@app.post("/api/recipes", response_model=schemas.Recipe)
def create_recipe(recipe: schemas.RecipeCreate, db: Session = Depends(get_db)):
    try:
        db_recipe = crud.create_recipe(db, recipe)
    except DuplicateRecipeError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return crud.to_schema(db_recipe)


@app.get("/api/recipes/{recipe_id}", response_model=schemas.Recipe)
def read_recipe(recipe_id: str, db: Session = Depends(get_db)):
    r = crud.get_recipe(db, recipe_id)
    if not r:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return crud.to_schema(r)


@app.put("/api/recipes/{recipe_id}", response_model=schemas.Recipe)
def update_recipe(
    recipe_id: str, recipe: schemas.RecipeCreate, db: Session = Depends(get_db)
):
    try:
        r = crud.update_recipe(db, recipe_id, recipe)
    except DuplicateRecipeError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if not r:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return crud.to_schema(r)


@app.delete("/api/recipes/{recipe_id}")
def delete_recipe(recipe_id: str, db: Session = Depends(get_db)):
    if not crud.delete_recipe(db, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"deleted": True}


@app.post("/api/match", response_model=List[schemas.RecipeMatch])
def match_recipes(
    payload: schemas.MatchRequest,
    db: Session = Depends(get_db),
    resolver: SubstitutionResolver = Depends(get_resolver),
):
    recipes = crud.query_recipes(db, payload.filters)
    matches = search_recipes(recipes, payload.ingredients, resolver)
    logger.info(
        "match: %d ingredient(s), %d candidate(s), %d result(s)",
        len(payload.ingredients), len(recipes), len(matches),
    )
    return matches


@app.post("/api/generate", response_model=schemas.GenerationResponse)
def generate(payload: schemas.GenerateRequest):
    try:
        return generate_recipe_response(payload.ingredients)
    except NoIngredientsError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.get("/api/favorites", response_model=List[schemas.Favorite])
def list_favorites(
    user_id: str = Depends(get_user_id), db: Session = Depends(get_db)
):
    return crud.get_favorites(db, user_id)


@app.post("/api/favorites/{recipe_id}", response_model=schemas.Favorite)
def add_favorite(
    recipe_id: str,
    payload: Optional[schemas.FavoriteCreate] = None,
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    if not crud.get_recipe(db, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    rating = payload.rating if payload else None
    try:
        return crud.add_favorite(db, user_id, recipe_id, rating)
    except FavoriteExistsError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.delete("/api/favorites/{recipe_id}")
def remove_favorite(
    recipe_id: str,
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    if not crud.remove_favorite(db, user_id, recipe_id):
        raise HTTPException(status_code=404, detail="Favorite not found")
    return {"deleted": True}


@app.get("/api/favorites/{recipe_id}/rating")
def read_rating(
    recipe_id: str,
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    return {
        "recipe_id": recipe_id,
        "favorite": crud.is_favorite(db, user_id, recipe_id),
        "rating": crud.get_rating(db, user_id, recipe_id),
    }


@app.put("/api/favorites/{recipe_id}/rating", response_model=schemas.Favorite)
def set_rating(
    recipe_id: str,
    payload: schemas.RatingUpdate,
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    favorite = crud.update_rating(db, user_id, recipe_id, payload.rating)
    if not favorite:
        raise HTTPException(status_code=404, detail="Favorite not found")
    return favorite
