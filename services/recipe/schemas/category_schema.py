"""Category schemas."""

from services.recipe.schemas.recipe_schema import CamelModel


class CategoryOut(CamelModel):
    """카테고리 조회 응답"""
    id: int
    name: str
