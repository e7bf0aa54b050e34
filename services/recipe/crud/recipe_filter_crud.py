"""
레시피 검색 조건(SearchFilters) -> SQLAlchemy 조건절 목록 변환

각 조건절 함수는 필드 하나만 보고 절 하나(또는 None)를 만든다.
최종 조건은 모든 절의 AND. 작성자 이름 -> 사용자 ID 해석만 I/O가 있다.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy import ColumnElement, or_

from common.logger import get_logger
from services.recipe.models.core_model import Category, Ingredient, Recipe
from services.recipe.schemas.recipe_schema import SearchFilters
from services.recipe.utils.ports import UserDirectoryPort

logger = get_logger("recipe_filter_crud")


@dataclass
class RecipeFilter:
    """
    검색 조건절 묶음
    - is_empty=True 이면 결과가 0건으로 확정된 상태 (쿼리 실행 없이 빈 페이지 반환)
    """
    clauses: List[ColumnElement] = field(default_factory=list)
    is_empty: bool = False


# -----------------------------
# 개별 조건절
# -----------------------------

def text_clause(text: Optional[str]) -> Optional[ColumnElement]:
    """이름 또는 설명에 text 포함 (대소문자 무시)"""
    if not text:
        return None
    return or_(
        Recipe.recipe_name.icontains(text, autoescape=True),
        Recipe.description.icontains(text, autoescape=True),
    )


def author_clause(author_ids: Optional[List[int]]) -> Optional[ColumnElement]:
    """작성자 ID 목록 중 하나 (빈 목록은 호출 전에 걸러야 함)"""
    if author_ids is None:
        return None
    if not author_ids:
        raise ValueError("author_ids가 비어 있으면 조건절을 만들 수 없습니다")
    return Recipe.author_id.in_(author_ids)


def category_clause(names: Optional[List[str]]) -> Optional[ColumnElement]:
    """요청 카테고리 이름 중 하나 이상을 가진 레시피"""
    if not names:
        return None
    return Recipe.categories.any(Category.category_name.in_(names))


def ingredient_clause(fragment: Optional[str], include: bool = True) -> Optional[ColumnElement]:
    """
    재료명에 fragment 포함 여부
    - include=True: 하나 이상의 재료명에 포함
    - include=False: 어떤 재료명에도 포함되지 않음
    """
    if not fragment:
        return None
    matches = Recipe.ingredients.any(Ingredient.ingredient_name.icontains(fragment, autoescape=True))
    return matches if include else ~matches


def prep_time_clause(max_minutes: Optional[int]) -> Optional[ColumnElement]:
    """총 조리시간 <= max_minutes"""
    if max_minutes is None:
        return None
    return Recipe.prep_time_minutes <= max_minutes


def rating_clause(min_rating: Optional[float]) -> Optional[ColumnElement]:
    """평균 별점 >= min_rating"""
    if min_rating is None:
        return None
    return Recipe.average_rating >= min_rating


# -----------------------------
# 조건 조립
# -----------------------------

async def build_recipe_filter(filters: SearchFilters, users: UserDirectoryPort) -> RecipeFilter:
    """
    SearchFilters -> RecipeFilter
    - 작성자 이름과 일치하는 사용자가 없으면 is_empty=True (조건 없음으로 취급하지 않음)
    """
    author_ids: Optional[List[int]] = None
    if filters.author:
        author_ids = await users.find_ids_by_name(filters.author)
        if not author_ids:
            logger.info(f"작성자 검색 결과 없음, 빈 결과 반환: autor={filters.author!r}")
            return RecipeFilter(clauses=[], is_empty=True)

    candidates = [
        text_clause(filters.text),
        author_clause(author_ids),
        category_clause(filters.categories),
        ingredient_clause(filters.ingredient, filters.include_ingredient),
        prep_time_clause(filters.max_prep_time),
        rating_clause(filters.min_rating),
    ]
    clauses = [clause for clause in candidates if clause is not None]
    logger.debug(f"검색 조건절 생성 완료: 조건수={len(clauses)}")
    return RecipeFilter(clauses=clauses)
