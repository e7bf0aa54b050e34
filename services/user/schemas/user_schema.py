"""
User 관련 Pydantic 스키마
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr

from services.recipe.schemas.recipe_schema import CamelModel


class UserOut(BaseModel):
    """인증된 사용자 정보"""
    user_id: int
    email: EmailStr
    username: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FavoriteToggleResponse(CamelModel):
    """즐겨찾기 토글 결과 (recipeId, favorited)"""
    recipe_id: int
    favorited: bool
