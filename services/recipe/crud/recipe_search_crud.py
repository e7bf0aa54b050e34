"""
레시피 검색 실행 (조건절 + 페이지 범위 -> 정렬된 한 페이지 + 전체 건수)

- count 와 page 조회는 같은 세션 트랜잭션 안에서 수행해 같은 스냅샷을 본다
- 정렬: 생성일 내림차순, 동률이면 RECIPE_ID 내림차순
- 저장소 오류는 StorageException(재시도 가능)으로 변환, 부분 결과는 반환하지 않음
"""

from __future__ import annotations

import time
from typing import Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.errors import StorageException
from common.logger import get_logger, log_with_context
from services.recipe.crud.recipe_filter_crud import build_recipe_filter
from services.recipe.models.core_model import Recipe
from services.recipe.schemas.recipe_schema import (
    IngredientOut,
    RecipeSummary,
    SearchFilters,
    StepOut,
)
from services.recipe.utils.pagination import build_paginated_response, normalize_pagination
from services.recipe.utils.ports import FavoritesPort, UserDirectoryPort

logger = get_logger("recipe_search_crud")


def format_recipe_summary(
    recipe: Recipe,
    author_display_name: str,
    favorited: Optional[bool] = None,
) -> RecipeSummary:
    """ORM Recipe -> 공개 요약 스키마"""
    return RecipeSummary(
        id=recipe.recipe_id,
        name=recipe.recipe_name,
        servings=recipe.servings or 1,
        description=recipe.description or "",
        ingredients=[
            IngredientOut(name=i.ingredient_name, quantity=i.quantity, unit=i.unit)
            for i in recipe.ingredients
        ],
        steps=[
            StepOut(order=s.step_order, description=s.description or "", media=s.media or [])
            for s in recipe.steps
        ],
        media=recipe.media or [],
        categories=[c.category_name for c in recipe.categories],
        author_display_name=author_display_name,
        created_at=recipe.created_at,
        prep_time_minutes=recipe.prep_time_minutes or 0,
        average_rating=recipe.average_rating or 0.0,
        favorited=favorited,
    )


async def summarize_recipes(
    recipes: Iterable[Recipe],
    users: UserDirectoryPort,
    favorites: Optional[FavoritesPort] = None,
    caller_id: Optional[int] = None,
) -> List[RecipeSummary]:
    """작성자 이름/즐겨찾기 여부를 일괄 조회해 요약 목록 생성 (순서 유지)"""
    recipes = list(recipes)
    if not recipes:
        return []

    names = await users.get_display_names(r.author_id for r in recipes)

    favorited_ids = None
    if caller_id is not None and favorites is not None:
        favorited_ids = await favorites.get_favorited_ids(caller_id, [r.recipe_id for r in recipes])

    return [
        format_recipe_summary(
            recipe,
            author_display_name=names.get(recipe.author_id, ""),
            favorited=None if favorited_ids is None else recipe.recipe_id in favorited_ids,
        )
        for recipe in recipes
    ]


class SearchExecutor:
    """레시피 검색 실행기 - 요청마다 세션/협력자를 주입받아 생성"""

    def __init__(self, db: AsyncSession, users: UserDirectoryPort, favorites: FavoritesPort):
        self.db = db
        self.users = users
        self.favorites = favorites

    async def search(self, filters: SearchFilters, caller_id: Optional[int] = None) -> dict:
        """
        검색 조건으로 한 페이지 조회
        반환: {data, total, page, limit, total_pages}
        """
        start_time = time.time()
        bounds = normalize_pagination(filters.page, filters.limit)

        try:
            recipe_filter = await build_recipe_filter(filters, self.users)
            if recipe_filter.is_empty:
                return build_paginated_response([], bounds, 0)

            count_stmt = select(func.count()).select_from(Recipe).where(*recipe_filter.clauses)
            total = (await self.db.execute(count_stmt)).scalar_one()

            recipes: List[Recipe] = []
            if total > bounds.skip:
                page_stmt = (
                    select(Recipe)
                    .where(*recipe_filter.clauses)
                    .order_by(Recipe.created_at.desc(), Recipe.recipe_id.desc())
                    .offset(bounds.skip)
                    .limit(bounds.limit)
                )
                recipes = list((await self.db.execute(page_stmt)).scalars().all())

            summaries = await summarize_recipes(recipes, self.users, self.favorites, caller_id)
        except SQLAlchemyError as e:
            logger.error(f"레시피 검색 SQL 실행 실패: page={bounds.page}, limit={bounds.limit}, error={str(e)}")
            raise StorageException("레시피 검색 중 저장소 오류가 발생했습니다. 다시 시도해주세요.") from e

        log_with_context(
            logger,
            "info",
            f"레시피 검색 완료: total={total}, 결과수={len(summaries)}, page={bounds.page}",
            total=total,
            page=bounds.page,
            limit=bounds.limit,
            execution_time_seconds=round(time.time() - start_time, 3),
        )
        return build_paginated_response(summaries, bounds, total)
