"""
레시피 등록/상세/최신 목록 CRUD 함수
- 커밋/롤백은 라우터에서 담당
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from common.errors import NotFoundException, ValidationException
from common.logger import get_logger
from services.recipe.models.core_model import Ingredient, Recipe, RecipeStep
from services.recipe.schemas.recipe_schema import RecipeCreate
from services.recipe.utils.ports import CategoryDirectoryPort

logger = get_logger("recipe_crud")

LATEST_RECIPES_LIMIT = 10


async def create_recipe(
    db: AsyncSession,
    author_id: int,
    payload: RecipeCreate,
    categories: CategoryDirectoryPort,
) -> Recipe:
    """
    레시피 등록 (작성자 = 인증 사용자, 평균 별점 0으로 시작)
    - 카테고리는 이름으로 지정, 존재하지 않는 이름이 있으면 검증 에러
    """
    category_rows = []
    if payload.categories:
        category_rows = await categories.get_by_names(payload.categories)
        found = {c.category_name for c in category_rows}
        missing = sorted(set(payload.categories) - found)
        if missing:
            logger.warning(f"존재하지 않는 카테고리: user_id={author_id}, categories={missing}")
            raise ValidationException("categories", f"존재하지 않는 카테고리입니다: {', '.join(missing)}")

    recipe = Recipe(
        recipe_name=payload.name,
        servings=payload.servings,
        description=payload.description,
        media=list(payload.media),
        author_id=author_id,
        created_at=datetime.now(),
        prep_time_minutes=payload.prep_time_minutes,
        average_rating=0.0,
        ingredients=[
            Ingredient(
                position=index,
                ingredient_name=item.name,
                quantity=item.quantity,
                unit=item.unit,
            )
            for index, item in enumerate(payload.ingredients)
        ],
        steps=[
            RecipeStep(
                step_order=step.order if step.order is not None else index + 1,
                description=step.description,
                media=list(step.media),
            )
            for index, step in enumerate(payload.steps)
        ],
        categories=category_rows,
    )
    db.add(recipe)
    await db.flush()
    logger.info(f"레시피 등록: recipe_id={recipe.recipe_id}, author_id={author_id}")
    return recipe


async def get_recipe_by_id(db: AsyncSession, recipe_id: int) -> Optional[Recipe]:
    stmt = select(Recipe).where(Recipe.recipe_id == recipe_id)
    return (await db.execute(stmt)).scalar_one_or_none()


async def get_recipe_detail(db: AsyncSession, recipe_id: int) -> Recipe:
    """레시피 상세 (재료/단계/카테고리 포함), 없으면 NotFoundException"""
    recipe = await get_recipe_by_id(db, recipe_id)
    if recipe is None:
        raise NotFoundException("레시피")
    return recipe


async def list_latest_recipes(db: AsyncSession, limit: int = LATEST_RECIPES_LIMIT) -> List[Recipe]:
    """최근 등록 레시피 목록"""
    stmt = (
        select(Recipe)
        .order_by(Recipe.created_at.desc(), Recipe.recipe_id.desc())
        .limit(limit)
    )
    return list((await db.execute(stmt)).scalars().all())
