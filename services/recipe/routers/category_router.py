"""Category lookup endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from common.database.mariadb_service import get_maria_service_db
from common.logger import get_logger
from services.recipe.crud.category_crud import CategoryDirectory
from services.recipe.schemas.category_schema import CategoryOut

router = APIRouter()
logger = get_logger("recipe_router")


@router.get("/categories", response_model=List[CategoryOut])
async def get_categories(db: AsyncSession = Depends(get_maria_service_db)):
    """카테고리 목록 (이름순, 없으면 빈 목록)"""
    categories = await CategoryDirectory(db).list_all()
    logger.debug(f"카테고리 목록 조회: count={len(categories)}")
    return [CategoryOut(id=c.category_id, name=c.category_name) for c in categories]
