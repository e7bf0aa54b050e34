"""Recipe detail endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Path
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.database.mariadb_service import get_maria_service_db
from common.dependencies import get_optional_user
from common.errors import StorageException
from common.logger import get_logger
from services.recipe.crud.recipe_crud import get_recipe_detail
from services.recipe.crud.recipe_search_crud import summarize_recipes
from services.recipe.schemas.recipe_schema import RecipeSummary
from services.user.crud.favorite_crud import FavoritesService
from services.user.crud.user_read_crud import UserDirectory
from services.user.schemas.user_schema import UserOut

router = APIRouter()
logger = get_logger("recipe_router")


@router.get("/{recipe_id}", response_model=RecipeSummary, response_model_exclude_none=True)
async def get_recipe(
        recipe_id: int = Path(..., description="레시피 ID"),
        current_user: Optional[UserOut] = Depends(get_optional_user),
        db: AsyncSession = Depends(get_maria_service_db),
):
    """
    레시피 상세 정보 (재료/조리 단계/카테고리, 로그인 시 즐겨찾기 여부)
    """
    caller_id = current_user.user_id if current_user else None
    logger.info(f"레시피 상세 조회 API 호출: user_id={caller_id}, recipe_id={recipe_id}")

    try:
        recipe = await get_recipe_detail(db, recipe_id)
        summaries = await summarize_recipes([recipe], UserDirectory(db), FavoritesService(db), caller_id)
    except SQLAlchemyError as e:
        logger.error(f"레시피 상세 조회 실패: recipe_id={recipe_id}, user_id={caller_id}, error={str(e)}")
        raise StorageException() from e

    return summaries[0]
