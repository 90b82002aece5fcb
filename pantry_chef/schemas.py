from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Difficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class IngredientRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(
        default=None, json_schema_extra={"example": "Tomatoes"}
    )
    quantity: str = Field(default="", json_schema_extra={"example": "2 medium"})


class RecipeBase(BaseModel):
    name: str = Field(
        ..., json_schema_extra={"example": "Simple Pancakes"}
    )
    description: str = ""
    ingredients: List[IngredientRef] = Field(
        default_factory=list,
        json_schema_extra={
            "example": [
                {"name": "flour", "quantity": "1 cup"},
                {"name": "milk", "quantity": "1/2 cup"},
                {"name": "egg", "quantity": "2 large"},
            ]
        },
    )
    instructions: List[str] = Field(
        default_factory=list,
        json_schema_extra={
            "example": [
                "Mix dry ingredients",
                "Add wet ingredients",
                "Cook on skillet until golden",
            ]
        },
    )
    image_url: str = ""
    cooking_time: int = Field(default=0, ge=0)
    difficulty: Difficulty = Difficulty.easy
    diet_type: List[str] = Field(default_factory=list)
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0

    @field_validator("ingredients", mode="before")
    @classmethod
    def _coerce_ingredients(cls, value):
        # Older rows store bare strings instead of {name, quantity} objects.
        if value is None:
            return []
        return [{"name": v} if isinstance(v, str) else v for v in value]


class RecipeCreate(RecipeBase):
    pass


class Recipe(RecipeBase):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    created_at: Optional[datetime] = None

    def ingredient_names(self) -> List[Optional[str]]:
        return [i.name for i in self.ingredients]


class Substitution(BaseModel):
    model_config = ConfigDict(frozen=True)

    missing: str
    substitute: str


class RecipeMatch(Recipe):
    """A recipe scored against a user's ingredients. Never persisted."""

    match_score: float = Field(default=0.0, ge=0, le=100)
    matched_ingredients: List[str] = Field(default_factory=list)
    missing_ingredients: List[str] = Field(default_factory=list)
    substitutions: List[Substitution] = Field(default_factory=list)


class GeneratedRecipe(Recipe):
    """Recipe built from templates; nutrition values are static estimates."""


class GenerationResponse(BaseModel):
    recipes: List[GeneratedRecipe] = Field(default_factory=list)
    success: bool = True
    error: Optional[str] = None


class RecipeFilters(BaseModel):
    diet_type: List[str] = Field(default_factory=list)
    difficulty: Optional[Difficulty] = None
    max_cooking_time: Optional[int] = Field(default=None, ge=0)


class MatchRequest(BaseModel):
    ingredients: List[str] = Field(
        default_factory=list,
        json_schema_extra={"example": ["egg", "flour", "butter"]},
    )
    filters: RecipeFilters = Field(default_factory=RecipeFilters)


class GenerateRequest(BaseModel):
    ingredients: List[str] = Field(
        default_factory=list,
        json_schema_extra={"example": ["chicken", "broccoli"]},
    )


class RatingUpdate(BaseModel):
    rating: int = Field(..., ge=1, le=5)


class FavoriteCreate(BaseModel):
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class Favorite(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    recipe_id: str
    rating: Optional[int] = None
    created_at: Optional[datetime] = None
