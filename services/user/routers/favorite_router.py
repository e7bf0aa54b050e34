"""
즐겨찾기 API 라우터
- 트랜잭션 관리(commit/rollback)를 담당
"""

from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.database.mariadb_service import get_maria_service_db
from common.dependencies import get_current_user
from common.errors import NotFoundException, StorageException
from common.logger import get_logger
from services.recipe.crud.recipe_crud import get_recipe_by_id
from services.recipe.crud.recipe_search_crud import summarize_recipes
from services.recipe.schemas.recipe_schema import RecipeSummary
from services.user.crud.favorite_crud import FavoritesService, list_favorite_recipes, toggle_favorite
from services.user.crud.user_read_crud import UserDirectory
from services.user.schemas.user_schema import FavoriteToggleResponse, UserOut

router = APIRouter()
logger = get_logger("favorite_router")


@router.put("/favorites/{recipe_id}", response_model=FavoriteToggleResponse)
async def toggle_recipe_favorite(
    recipe_id: int = Path(..., description="레시피 ID"),
    current_user: UserOut = Depends(get_current_user),
    db: AsyncSession = Depends(get_maria_service_db),
):
    """
    즐겨찾기 등록/해제 토글
    """
    logger.info(f"즐겨찾기 토글 API 호출: user_id={current_user.user_id}, recipe_id={recipe_id}")

    try:
        if await get_recipe_by_id(db, recipe_id) is None:
            raise NotFoundException("레시피")
        favorited = await toggle_favorite(db, current_user.user_id, recipe_id)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"즐겨찾기 토글 실패: user_id={current_user.user_id}, recipe_id={recipe_id}, error={str(e)}")
        raise StorageException() from e

    return FavoriteToggleResponse(recipe_id=recipe_id, favorited=favorited)


@router.get("/favorites", response_model=List[RecipeSummary], response_model_exclude_none=True)
async def get_favorites(
    current_user: UserOut = Depends(get_current_user),
    db: AsyncSession = Depends(get_maria_service_db),
):
    """
    내 즐겨찾기 레시피 목록 (최근 등록 순)
    """
    logger.info(f"즐겨찾기 목록 조회 API 호출: user_id={current_user.user_id}")
    try:
        recipes = await list_favorite_recipes(db, current_user.user_id)
        return await summarize_recipes(recipes, UserDirectory(db), FavoritesService(db), current_user.user_id)
    except SQLAlchemyError as e:
        logger.error(f"즐겨찾기 목록 조회 실패: user_id={current_user.user_id}, error={str(e)}")
        raise StorageException() from e
