"""Recipe rating endpoints."""

from typing import List

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.database.mariadb_service import get_maria_service_db
from common.dependencies import get_current_user
from common.errors import DomainException, StorageException
from common.logger import get_logger
from services.recipe.crud.recipe_rating_crud import RatingAggregator, list_recipe_ratings
from services.recipe.schemas.recipe_rating_schema import (
    RatingSummary,
    RecipeRatingCreate,
    RecipeRatingResponse,
)
from services.user.crud.user_read_crud import UserDirectory
from services.user.schemas.user_schema import UserOut

router = APIRouter()
logger = get_logger("recipe_router")


@router.get("/{recipe_id}/ratings", response_model=List[RatingSummary])
async def get_ratings(
        recipe_id: int = Path(..., description="레시피 ID"),
        db: AsyncSession = Depends(get_maria_service_db),
):
    """
    레시피 별점/후기 목록 조회 (최근 순)
    """
    logger.info(f"레시피 별점 목록 조회 API 호출: recipe_id={recipe_id}")
    try:
        return await list_recipe_ratings(db, recipe_id, UserDirectory(db))
    except SQLAlchemyError as e:
        logger.error(f"레시피 별점 목록 조회 실패: recipe_id={recipe_id}, error={str(e)}")
        raise StorageException() from e


# ============================================================================
# 레시피 별점 등록/수정 API
# ============================================================================
@router.post("/{recipe_id}/rating", response_model=RecipeRatingResponse)
async def post_rating(
        current_user: UserOut = Depends(get_current_user),
        recipe_id: int = Path(..., description="레시피 ID"),
        req: RecipeRatingCreate = Body(...),
        db: AsyncSession = Depends(get_maria_service_db),
):
    """
    레시피 별점 등록 (1~5 정수, 후기 최대 500자)
    - 이미 등록한 별점이 있으면 수정
    - 응답에 재계산된 평균과 별점 개수 포함
    """
    logger.info(f"레시피 별점 등록 API 호출: user_id={current_user.user_id}, recipe_id={recipe_id}, rating={req.score}")

    aggregator = RatingAggregator(db, users=UserDirectory(db))
    try:
        result = await aggregator.rate(recipe_id, current_user.user_id, req.score, req.comment)
        await db.commit()
    except DomainException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        # 커밋 실패 등 트랜잭션 롤백
        await db.rollback()
        logger.error(f"레시피 별점 등록 실패: recipe_id={recipe_id}, user_id={current_user.user_id}, error={e}")
        raise StorageException() from e

    logger.info(
        f"레시피 별점 등록 완료: recipe_id={recipe_id}, user_id={current_user.user_id}, "
        f"average={result.average}, total={result.total_ratings}"
    )
    return RecipeRatingResponse(
        rating=result.rating,
        average=result.average,
        total_ratings=result.total_ratings,
        created=result.created,
    )
