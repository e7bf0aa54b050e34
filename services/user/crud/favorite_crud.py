"""
즐겨찾기(USER_FAVORITE) CRUD 함수
- 트랜잭션 커밋/롤백은 라우터에서 담당
"""

from datetime import datetime
from typing import Iterable, List, Set

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from common.logger import get_logger
from services.recipe.models.core_model import Recipe
from services.user.models.user_model import UserFavorite

logger = get_logger("favorite_crud")


async def toggle_favorite(db: AsyncSession, user_id: int, recipe_id: int) -> bool:
    """
    즐겨찾기 등록/해제 토글
    반환: 토글 후 즐겨찾기 상태 (True=등록됨)
    """
    stmt = select(UserFavorite).where(
        UserFavorite.user_id == user_id,
        UserFavorite.recipe_id == recipe_id,
    )
    try:
        existing = (await db.execute(stmt)).scalar_one_or_none()
    except Exception as e:
        logger.error(f"즐겨찾기 상태 확인 SQL 실행 실패: user_id={user_id}, recipe_id={recipe_id}, error={str(e)}")
        raise

    if existing:
        await db.delete(existing)
        await db.flush()
        logger.info(f"즐겨찾기 해제: user_id={user_id}, recipe_id={recipe_id}")
        return False

    db.add(UserFavorite(user_id=user_id, recipe_id=recipe_id, created_at=datetime.now()))
    await db.flush()
    logger.info(f"즐겨찾기 등록: user_id={user_id}, recipe_id={recipe_id}")
    return True


async def get_favorited_recipe_ids(db: AsyncSession, user_id: int, recipe_ids: Iterable[int]) -> Set[int]:
    """recipe_ids 중 사용자가 즐겨찾기한 ID 집합 (한 번의 쿼리)"""
    ids = sorted(set(recipe_ids))
    if not ids:
        return set()
    stmt = select(UserFavorite.recipe_id).where(
        UserFavorite.user_id == user_id,
        UserFavorite.recipe_id.in_(ids),
    )
    return set((await db.execute(stmt)).scalars().all())


async def list_favorite_recipes(db: AsyncSession, user_id: int) -> List[Recipe]:
    """사용자 즐겨찾기 레시피 목록 (최근 등록 순)"""
    stmt = (
        select(Recipe)
        .join(UserFavorite, UserFavorite.recipe_id == Recipe.recipe_id)
        .where(UserFavorite.user_id == user_id)
        .order_by(UserFavorite.created_at.desc(), UserFavorite.favorite_id.desc())
    )
    return list((await db.execute(stmt)).scalars().all())


class FavoritesService:
    """FavoritesPort 구현"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_favorited_ids(self, user_id: int, recipe_ids: Iterable[int]) -> Set[int]:
        return await get_favorited_recipe_ids(self.db, user_id, recipe_ids)
