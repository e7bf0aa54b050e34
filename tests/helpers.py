"""테스트 시드 데이터 헬퍼"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from common.auth.jwt_handler import create_access_token
from services.recipe.models.core_model import (
    Category,
    Ingredient,
    IngredientUnit,
    Recipe,
    RecipeRating,
    RecipeStep,
)
from services.user.models.user_model import User, UserFavorite

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


async def add_user(db: AsyncSession, username: str) -> User:
    user = User(username=username, email=f"{username.lower()}@recetas.com", created_at=BASE_TIME)
    db.add(user)
    await db.flush()
    return user


async def add_category(db: AsyncSession, name: str) -> Category:
    category = Category(category_name=name)
    db.add(category)
    await db.flush()
    return category


async def add_recipe(
    db: AsyncSession,
    author: User,
    name: str,
    *,
    description: str = "",
    minutes_ago: int = 0,
    prep_time: int = 30,
    average: float = 0.0,
    ingredients: Sequence[Tuple[str, float, IngredientUnit]] = (),
    categories: Iterable[Category] = (),
    created_at: Optional[datetime] = None,
) -> Recipe:
    recipe = Recipe(
        recipe_name=name,
        servings=2,
        description=description,
        media=[],
        author_id=author.user_id,
        created_at=created_at or BASE_TIME - timedelta(minutes=minutes_ago),
        prep_time_minutes=prep_time,
        average_rating=average,
        ingredients=[
            Ingredient(position=i, ingredient_name=n, quantity=q, unit=u)
            for i, (n, q, u) in enumerate(ingredients)
        ],
        steps=[RecipeStep(step_order=1, description="Mezclar todo", media=[])],
        categories=list(categories),
    )
    db.add(recipe)
    await db.flush()
    return recipe


async def add_rating(db: AsyncSession, recipe: Recipe, user: User, score: int, comment: str = "") -> RecipeRating:
    rating = RecipeRating(
        recipe_id=recipe.recipe_id,
        user_id=user.user_id,
        rating=score,
        comment=comment,
        created_at=BASE_TIME,
    )
    db.add(rating)
    await db.flush()
    return rating


async def add_favorite(db: AsyncSession, user: User, recipe: Recipe) -> None:
    db.add(UserFavorite(user_id=user.user_id, recipe_id=recipe.recipe_id, created_at=BASE_TIME))
    await db.flush()


def auth_headers(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user_id)})}"}
