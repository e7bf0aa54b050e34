"""
레시피 등록 / 최신 목록 API 라우터
- 파라미터 파싱, 유저 인증 확인, 의존성 주입 (Depends)
- 트랜잭션 관리(commit/rollback)를 담당
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.database.mariadb_service import get_maria_service_db
from common.dependencies import get_current_user, get_optional_user
from common.errors import DomainException, StorageException
from common.logger import get_logger
from services.recipe.crud.category_crud import CategoryDirectory
from services.recipe.crud.recipe_crud import create_recipe, list_latest_recipes
from services.recipe.crud.recipe_search_crud import format_recipe_summary, summarize_recipes
from services.recipe.schemas.recipe_schema import RecipeCreate, RecipeSummary
from services.user.crud.favorite_crud import FavoritesService
from services.user.crud.user_read_crud import UserDirectory
from services.user.schemas.user_schema import UserOut

router = APIRouter()
logger = get_logger("recipe_router")


@router.get("/latest", response_model=List[RecipeSummary], response_model_exclude_none=True)
async def latest_recipes(
    current_user: Optional[UserOut] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_maria_service_db),
):
    """
    최근 등록 레시피 10건
    """
    caller_id = current_user.user_id if current_user else None
    logger.info(f"최신 레시피 조회 API 호출: uid={caller_id}")
    try:
        recipes = await list_latest_recipes(db)
        return await summarize_recipes(recipes, UserDirectory(db), FavoritesService(db), caller_id)
    except SQLAlchemyError as e:
        logger.error(f"최신 레시피 조회 실패: uid={caller_id}, error={str(e)}")
        raise StorageException() from e


@router.post(
    "",
    response_model=RecipeSummary,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def publish_recipe(
    current_user: UserOut = Depends(get_current_user),
    req: RecipeCreate = Body(...),
    db: AsyncSession = Depends(get_maria_service_db),
):
    """
    레시피 등록 (작성자 = 로그인 사용자)
    """
    logger.info(f"레시피 등록 API 호출: user_id={current_user.user_id}, name={req.name!r}")
    try:
        recipe = await create_recipe(db, current_user.user_id, req, CategoryDirectory(db))
        await db.commit()
    except DomainException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"레시피 등록 실패: user_id={current_user.user_id}, error={str(e)}")
        raise StorageException() from e

    logger.info(f"레시피 등록 완료: recipe_id={recipe.recipe_id}, user_id={current_user.user_id}")
    return format_recipe_summary(recipe, author_display_name=current_user.username)
