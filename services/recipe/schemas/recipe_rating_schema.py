"""Recipe rating schemas."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from services.recipe.schemas.recipe_schema import CamelModel


class RecipeRatingCreate(CamelModel):
    """
    별점 등록 요청 바디
    - 범위(1~5) 검증은 RatingAggregator에서 수행해 도메인 검증 에러로 응답한다
    """
    score: Any = Field(None, alias="puntuacion", description="1~5 정수")
    comment: Optional[str] = Field(None, alias="comentario", description="최대 500자")


class RatingSummary(CamelModel):
    id: int
    recipe_id: int
    author_display_name: str
    score: int
    comment: str = ""
    created_at: datetime


class RecipeRatingResponse(CamelModel):
    """별점 등록 결과 - 저장된 별점과 재계산된 평균/개수"""
    rating: RatingSummary
    average: float
    total_ratings: int
    created: bool = Field(..., description="신규 등록이면 true, 기존 별점 수정이면 false")
