"""Recipe search endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from common.database.mariadb_service import get_maria_service_db
from common.dependencies import get_optional_user
from common.logger import get_logger
from services.recipe.crud.recipe_search_crud import SearchExecutor
from services.recipe.schemas.recipe_schema import RecipePageResponse, SearchFilters
from services.user.crud.favorite_crud import FavoritesService
from services.user.crud.user_read_crud import UserDirectory
from services.user.schemas.user_schema import UserOut

router = APIRouter()
logger = get_logger("recipe_router")


@router.get("/search", response_model=RecipePageResponse, response_model_exclude_none=True)
async def search_recipes(
    texto: Optional[str] = Query(None, description="이름/설명 포함 텍스트"),
    autor: Optional[str] = Query(None, description="작성자 이름 일부"),
    categorias: Optional[List[str]] = Query(None, description="카테고리 이름 (반복 또는 콤마 구분)"),
    ingrediente: Optional[str] = Query(None, description="재료명 일부"),
    incluirIngrediente: Optional[str] = Query(None, description="true: 재료 포함, false: 재료 제외"),
    tiempoPreparacion: Optional[str] = Query(None, description="최대 조리시간(분)"),
    valoracion: Optional[str] = Query(None, description="최소 평균 별점"),
    page: Optional[str] = Query(None, description="페이지 번호 (기본 1)"),
    limit: Optional[str] = Query(None, description="페이지 크기 (1~100, 기본 10)"),
    current_user: Optional[UserOut] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_maria_service_db),
):
    """
    레시피 검색 (모든 조건 선택, 조건끼리는 AND)
    - 형식이 잘못된 조건은 무시, page/limit은 범위로 보정
    - 로그인한 경우에만 favorited 포함
    """
    filters = SearchFilters.model_validate({
        "texto": texto,
        "autor": autor,
        "categorias": categorias,
        "ingrediente": ingrediente,
        "incluirIngrediente": incluirIngrediente,
        "tiempoPreparacion": tiempoPreparacion,
        "valoracion": valoracion,
        "page": page,
        "limit": limit,
    })
    caller_id = current_user.user_id if current_user else None
    logger.info(f"레시피 검색 호출: uid={caller_id}, filters={filters.model_dump(exclude_none=True)}")

    executor = SearchExecutor(db, users=UserDirectory(db), favorites=FavoritesService(db))
    return await executor.search(filters, caller_id=caller_id)
