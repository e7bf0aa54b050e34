"""Category lookup CRUD functions."""

from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from services.recipe.models.core_model import Category


async def list_categories(db: AsyncSession) -> List[Category]:
    """전체 카테고리 (이름순)"""
    stmt = select(Category).order_by(Category.category_name)
    return list((await db.execute(stmt)).scalars().all())


async def get_categories_by_names(db: AsyncSession, names: Iterable[str]) -> List[Category]:
    """이름 목록에 해당하는 카테고리 (존재하는 것만)"""
    wanted = sorted(set(names))
    if not wanted:
        return []
    stmt = select(Category).where(Category.category_name.in_(wanted)).order_by(Category.category_name)
    return list((await db.execute(stmt)).scalars().all())


class CategoryDirectory:
    """CategoryDirectoryPort 구현"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_names(self, names: Iterable[str]) -> List[Category]:
        return await get_categories_by_names(self.db, names)

    async def list_all(self) -> List[Category]:
        return await list_categories(self.db)
