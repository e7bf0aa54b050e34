"""
레시피 요청/응답용 Pydantic 스키마 모듈
- DB ORM과 분리, API 직렬화/유효성 검증용
- 응답 JSON 키는 camelCase (authorDisplayName, totalPages ...)
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from common.utils import clean_text, to_bool, to_float_or_none, to_int_or_none
from services.recipe.models.core_model import IngredientUnit


class CamelModel(BaseModel):
    """camelCase 직렬화 공통 설정"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------
# 검색 조건 스키마
# -----------------------------

class SearchFilters(CamelModel):
    """
    레시피 검색 조건 (요청 단위, 저장하지 않음)
    - 모든 필드는 선택, 없으면 해당 조건 없음
    - 형식이 잘못된 값은 거절하지 않고 '미입력'으로 처리
    - page/limit은 원본 그대로 보관하고 페이지네이션 단계에서 정규화
    """
    text: Optional[str] = Field(None, alias="texto")
    author: Optional[str] = Field(None, alias="autor")
    categories: Optional[List[str]] = Field(None, alias="categorias")
    ingredient: Optional[str] = Field(None, alias="ingrediente")
    include_ingredient: bool = Field(True, alias="incluirIngrediente")
    max_prep_time: Optional[int] = Field(None, alias="tiempoPreparacion")
    min_rating: Optional[float] = Field(None, alias="valoracion")
    page: Any = None
    limit: Any = None

    @field_validator("text", "author", "ingredient", mode="before")
    @classmethod
    def _clean_fragment(cls, value):
        return clean_text(value)

    @field_validator("categories", mode="before")
    @classmethod
    def _split_categories(cls, value):
        if value is None:
            return None
        raw = [value] if isinstance(value, str) else value
        if not isinstance(raw, (list, tuple, set)):
            return None
        names: List[str] = []
        for item in raw:
            if not isinstance(item, str):
                continue
            # "Postres,Veggie" 형태도 허용
            for part in item.split(","):
                part = part.strip()
                if part and part not in names:
                    names.append(part)
        return names or None

    @field_validator("include_ingredient", mode="before")
    @classmethod
    def _parse_include(cls, value):
        return to_bool(value, default=True)

    @field_validator("max_prep_time", mode="before")
    @classmethod
    def _parse_prep_time(cls, value):
        minutes = to_int_or_none(value)
        return minutes if minutes is not None and minutes >= 0 else None

    @field_validator("min_rating", mode="before")
    @classmethod
    def _parse_rating(cls, value):
        return to_float_or_none(value)


# -----------------------------
# 재료 / 조리 단계 스키마
# -----------------------------

class IngredientIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    quantity: float = Field(..., gt=0)
    unit: IngredientUnit


class IngredientOut(CamelModel):
    name: str
    quantity: float
    unit: IngredientUnit


class StepIn(CamelModel):
    order: Optional[int] = Field(None, ge=1, description="미입력 시 목록 순서")
    description: str = ""
    media: List[str] = Field(default_factory=list)


class StepOut(CamelModel):
    order: int
    description: str
    media: List[str] = Field(default_factory=list)


# -----------------------------
# 레시피 등록 요청
# -----------------------------

class RecipeCreate(CamelModel):
    """레시피 등록 요청 바디 (작성자는 인증 정보에서 결정)"""
    name: str = Field(..., min_length=1, max_length=200)
    servings: int = Field(1, ge=1)
    description: str = Field(..., min_length=1)
    ingredients: List[IngredientIn] = Field(..., min_length=1)
    steps: List[StepIn] = Field(..., min_length=1)
    categories: List[str] = Field(default_factory=list, description="카테고리 이름 목록")
    media: List[str] = Field(default_factory=list)
    prep_time_minutes: int = Field(0, ge=0)


# -----------------------------
# 레시피 요약 / 페이지 응답
# -----------------------------

class RecipeSummary(CamelModel):
    """레시피 공개 요약 (favorited는 호출자가 있을 때만 채움)"""
    id: int
    name: str
    servings: int
    description: str
    ingredients: List[IngredientOut] = Field(default_factory=list)
    steps: List[StepOut] = Field(default_factory=list)
    media: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    author_display_name: str
    created_at: datetime
    prep_time_minutes: int
    average_rating: float
    favorited: Optional[bool] = None


class RecipePageResponse(CamelModel):
    """페이지네이션 응답 봉투"""
    data: List[RecipeSummary]
    total: int
    page: int
    limit: int
    total_pages: int
