import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint,
)

from .db import Base


def _new_id():
    return str(uuid.uuid4())


def _now():
    return datetime.now(timezone.utc)


class Recipe(Base):
    __tablename__ = "recipes"
    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(200), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    ingredients = Column(Text, nullable=True)  # JSON-encoded [{name, quantity}]
    instructions = Column(Text, nullable=True)  # JSON-encoded list
    image_url = Column(String(500), nullable=False, default="")
    cooking_time = Column(Integer, nullable=False, default=0, index=True)
    difficulty = Column(String(10), nullable=False, default="easy", index=True)
    diet_type = Column(Text, nullable=True)  # JSON-encoded list
    calories = Column(Integer, nullable=False, default=0)
    protein = Column(Integer, nullable=False, default=0)
    carbs = Column(Integer, nullable=False, default=0)
    fat = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)


class UserFavorite(Base):
    __tablename__ = "user_favorites"
    __table_args__ = (UniqueConstraint("user_id", "recipe_id"),)
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(100), index=True, nullable=False)
    recipe_id = Column(
        String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    rating = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
