"""
User / 즐겨찾기 ORM 모델 정의
- 변수는 소문자, DB 컬럼명은 대문자로 명시적 매핑
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from common.database.base_mariadb import MariaBase


class User(MariaBase):
    __tablename__ = "USERS"

    user_id = Column("USER_ID", Integer, primary_key=True, autoincrement=True)
    email = Column("EMAIL", String(255), unique=True, nullable=False)
    username = Column("USERNAME", String(100), unique=True, nullable=False)
    created_at = Column("CREATED_AT", DateTime, default=datetime.now)


class UserFavorite(MariaBase):
    """USER_FAVORITE 테이블 - 사용자별 즐겨찾기 레시피 (user, recipe) 유일"""
    __tablename__ = "USER_FAVORITE"
    __table_args__ = (
        UniqueConstraint("USER_ID", "RECIPE_ID", name="UQ_USER_FAVORITE_USER_RECIPE"),
    )

    favorite_id = Column("FAVORITE_ID", Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        "USER_ID",
        Integer,
        ForeignKey("USERS.USER_ID", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    recipe_id = Column(
        "RECIPE_ID",
        Integer,
        ForeignKey("FCT_RECIPE.RECIPE_ID", ondelete="CASCADE"),
        nullable=False,
    )
    created_at = Column("CREATED_AT", DateTime, default=datetime.now)
