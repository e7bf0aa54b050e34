"""Core MariaDB recipe models."""

import enum
from datetime import datetime

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from common.database.base_mariadb import MariaBase


class IngredientUnit(str, enum.Enum):
    """재료 단위"""
    gram = "gram"
    kilogram = "kilogram"
    unit = "unit"
    tablespoon = "tablespoon"
    teaspoon = "teaspoon"


recipe_category = Table(
    "RECIPE_CATEGORY",
    MariaBase.metadata,
    Column("RECIPE_ID", Integer, ForeignKey("FCT_RECIPE.RECIPE_ID", ondelete="CASCADE"), primary_key=True),
    Column("CATEGORY_ID", Integer, ForeignKey("CATEGORY.CATEGORY_ID"), primary_key=True),
)


class Recipe(MariaBase):
    """FCT_RECIPE 테이블의 ORM 모델."""

    __tablename__ = "FCT_RECIPE"

    recipe_id = Column("RECIPE_ID", Integer, primary_key=True, autoincrement=True)
    recipe_name = Column("RECIPE_NAME", String(200), nullable=False)
    servings = Column("SERVINGS", Integer, nullable=False, default=1)
    description = Column("DESCRIPTION", Text, nullable=False, default="")
    media = Column("MEDIA", JSON, nullable=False, default=list)
    author_id = Column(
        "AUTHOR_ID",
        Integer,
        ForeignKey("USERS.USER_ID"),
        nullable=False,
        index=True,
    )
    created_at = Column("CREATED_AT", DateTime, nullable=False, default=datetime.now, index=True)
    prep_time_minutes = Column("PREP_TIME_MINUTES", Integer, nullable=False, default=0)
    # 평균 별점 (RECIPE_RATING 전체 재계산 결과, 소수점 1자리)
    average_rating = Column("AVERAGE_RATING", Float, nullable=False, default=0.0)

    ingredients = relationship(
        "Ingredient",
        back_populates="recipe",
        order_by="Ingredient.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    steps = relationship(
        "RecipeStep",
        back_populates="recipe",
        order_by="RecipeStep.step_order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    categories = relationship(
        "Category",
        secondary=recipe_category,
        order_by="Category.category_name",
        lazy="selectin",
    )


class Ingredient(MariaBase):
    """FCT_INGREDIENT 테이블의 ORM 모델."""

    __tablename__ = "FCT_INGREDIENT"

    ingredient_id = Column("INGREDIENT_ID", Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        "RECIPE_ID",
        Integer,
        ForeignKey("FCT_RECIPE.RECIPE_ID", onupdate="CASCADE", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column("POSITION", Integer, nullable=False, default=0)
    ingredient_name = Column("INGREDIENT_NAME", String(100), nullable=False)
    quantity = Column("QUANTITY", Float, nullable=False)
    unit = Column("UNIT", Enum(IngredientUnit, native_enum=False, length=20), nullable=False)

    recipe = relationship("Recipe", back_populates="ingredients")


class RecipeStep(MariaBase):
    """FCT_RECIPE_STEP 테이블의 ORM 모델."""

    __tablename__ = "FCT_RECIPE_STEP"

    step_id = Column("STEP_ID", Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        "RECIPE_ID",
        Integer,
        ForeignKey("FCT_RECIPE.RECIPE_ID", onupdate="CASCADE", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    step_order = Column("STEP_ORDER", Integer, nullable=False)
    description = Column("DESCRIPTION", Text, nullable=False, default="")
    media = Column("MEDIA", JSON, nullable=False, default=list)

    recipe = relationship("Recipe", back_populates="steps")


class Category(MariaBase):
    """CATEGORY 테이블의 ORM 모델 (생성 후 변경 없음)."""

    __tablename__ = "CATEGORY"

    category_id = Column("CATEGORY_ID", Integer, primary_key=True, autoincrement=True)
    category_name = Column("CATEGORY_NAME", String(100), unique=True, nullable=False)
    created_at = Column("CREATED_AT", DateTime, default=datetime.now)


class RecipeRating(MariaBase):
    """RECIPE_RATING 테이블의 ORM 모델 - (레시피, 사용자)당 1건."""

    __tablename__ = "RECIPE_RATING"
    __table_args__ = (
        UniqueConstraint("RECIPE_ID", "USER_ID", name="UQ_RECIPE_RATING_RECIPE_USER"),
    )

    rating_id = Column("RATING_ID", Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        "RECIPE_ID",
        Integer,
        ForeignKey("FCT_RECIPE.RECIPE_ID", onupdate="CASCADE", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column("USER_ID", Integer, ForeignKey("USERS.USER_ID"), nullable=False)
    rating = Column("RATING", Integer, nullable=False)
    comment = Column("COMMENT", String(500), nullable=True)
    created_at = Column("CREATED_AT", DateTime, nullable=False, default=datetime.now)
