"""User read CRUD functions."""

from typing import Dict, Iterable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from common.logger import get_logger
from services.user.models.user_model import User

logger = get_logger("user_read_crud")


async def get_user_by_id(db: AsyncSession, user_id: int):
    """주어진 사용자 ID(user_id)에 해당하는 사용자(User) 객체를 반환 (없으면 None)."""
    result = await db.execute(select(User).where(User.user_id == user_id))  # type: ignore
    return result.scalar_one_or_none()


async def find_user_ids_by_name(db: AsyncSession, fragment: str) -> List[int]:
    """이름에 fragment가 포함된 사용자 ID 목록 (대소문자 무시, 와일드카드 문자는 그대로 매칭)."""
    stmt = (
        select(User.user_id)
        .where(User.username.icontains(fragment, autoescape=True))
        .order_by(User.user_id)
    )
    user_ids = list((await db.execute(stmt)).scalars().all())
    logger.debug(f"이름으로 사용자 검색: fragment={fragment!r}, 결과수={len(user_ids)}")
    return user_ids


async def get_usernames(db: AsyncSession, user_ids: Iterable[int]) -> Dict[int, str]:
    """사용자 ID 목록 -> {user_id: username} (한 번의 쿼리)."""
    ids = sorted(set(user_ids))
    if not ids:
        return {}
    stmt = select(User.user_id, User.username).where(User.user_id.in_(ids))
    rows = (await db.execute(stmt)).all()
    return {user_id: username or "" for user_id, username in rows}


class UserDirectory:
    """UserDirectoryPort 구현 - 요청 세션을 주입받아 사용"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_ids_by_name(self, fragment: str) -> List[int]:
        return await find_user_ids_by_name(self.db, fragment)

    async def get_display_names(self, user_ids: Iterable[int]) -> Dict[int, str]:
        return await get_usernames(self.db, user_ids)
