"""
Recipe rating CRUD functions.

별점 등록/수정과 레시피 평균 별점(AVERAGE_RATING) 재계산
- (레시피, 사용자)당 별점은 1건: 재등록은 기존 행 수정
- 평균은 매번 해당 레시피의 전체 별점을 다시 읽어 계산 (누적 보정 없음)
- 레시피 행을 SELECT ... FOR UPDATE 로 잠근 뒤 쓰기/재계산 -> 같은 레시피의 동시 요청은 직렬화
- 기존 별점 조회와 평균용 재조회도 잠금 읽기(current read): 트랜잭션 시작 시점 스냅샷이 아니라
  잠금 대기 중 커밋된 다른 요청의 별점까지 포함해야 한다 (REPEATABLE READ)
- 커밋/롤백은 라우터에서 담당
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.errors import ForbiddenException, NotFoundException, StorageException, ValidationException
from common.logger import get_logger, log_with_context
from services.recipe.models.core_model import Recipe, RecipeRating
from services.recipe.schemas.recipe_rating_schema import RatingSummary
from services.recipe.utils.ports import UserDirectoryPort

logger = get_logger("recipe_rating_crud")

MIN_SCORE = 1
MAX_SCORE = 5
MAX_COMMENT_LENGTH = 500


@dataclass
class RatingResult:
    rating: RatingSummary
    average: float
    total_ratings: int
    created: bool


def compute_average(scores: Sequence[int]) -> float:
    """평균 별점, 소수점 1자리 반올림(0.05 -> 0.1), 별점이 없으면 0.0"""
    if not scores:
        return 0.0
    mean = Decimal(sum(scores)) / Decimal(len(scores))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def validate_score(score: Any) -> int:
    """1~5 정수만 허용 (4.0 같은 정수값 float은 허용)"""
    if isinstance(score, bool) or score is None:
        raise ValidationException("score", "별점은 1~5 사이의 정수여야 합니다.")
    if isinstance(score, float):
        if not score.is_integer():
            raise ValidationException("score", "별점은 1~5 사이의 정수여야 합니다.")
        score = int(score)
    if not isinstance(score, int) or not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationException("score", "별점은 1~5 사이의 정수여야 합니다.")
    return score


def validate_comment(comment: Optional[str]) -> Optional[str]:
    if comment is None:
        return None
    if len(comment) > MAX_COMMENT_LENGTH:
        raise ValidationException("comment", f"후기는 최대 {MAX_COMMENT_LENGTH}자까지 입력할 수 있습니다.")
    return comment


def recipe_lock_query(recipe_id: int):
    """레시피 행 잠금 (작성자 확인용 컬럼만, 연관 관계 로딩 없음)"""
    return select(Recipe.recipe_id, Recipe.author_id).where(Recipe.recipe_id == recipe_id).with_for_update()


def existing_rating_query(recipe_id: int, author_id: int):
    return (
        select(RecipeRating)
        .where(RecipeRating.recipe_id == recipe_id, RecipeRating.user_id == author_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )


def rating_scores_query(recipe_id: int):
    """평균 재계산용 전체 별점 (잠금 읽기)"""
    return select(RecipeRating.rating).where(RecipeRating.recipe_id == recipe_id).with_for_update()


def format_rating_summary(rating: RecipeRating, author_display_name: str) -> RatingSummary:
    return RatingSummary(
        id=rating.rating_id,
        recipe_id=rating.recipe_id,
        author_display_name=author_display_name,
        score=rating.rating,
        comment=rating.comment or "",
        created_at=rating.created_at,
    )


async def get_recipe_rating(db: AsyncSession, recipe_id: int) -> Optional[float]:
    """
    해당 레시피에 저장된 평균 별점 (레시피가 없으면 None)
    """
    stmt = select(Recipe.average_rating).where(Recipe.recipe_id == recipe_id)
    return (await db.execute(stmt)).scalar_one_or_none()


async def list_recipe_ratings(db: AsyncSession, recipe_id: int, users: UserDirectoryPort) -> List[RatingSummary]:
    """레시피의 별점/후기 목록 (최근 순)"""
    if await get_recipe_rating(db, recipe_id) is None:
        raise NotFoundException("레시피")

    stmt = (
        select(RecipeRating)
        .where(RecipeRating.recipe_id == recipe_id)
        .order_by(RecipeRating.created_at.desc(), RecipeRating.rating_id.desc())
    )
    ratings = (await db.execute(stmt)).scalars().all()
    names = await users.get_display_names(r.user_id for r in ratings)
    return [format_rating_summary(r, names.get(r.user_id, "")) for r in ratings]


class RatingAggregator:
    """별점 등록(upsert) + 평균 재계산/저장"""

    def __init__(self, db: AsyncSession, users: UserDirectoryPort):
        self.db = db
        self.users = users

    async def rate(
        self,
        recipe_id: int,
        author_id: int,
        score: Any,
        comment: Optional[str] = None,
    ) -> RatingResult:
        """
        (recipe_id, author_id) 별점 등록 또는 수정 후 평균 재계산
        - 검증 실패/레시피 없음/본인 레시피는 쓰기 전에 거절
        """
        if recipe_id is None:
            raise ValidationException("recipe_id", "레시피 ID가 필요합니다.")
        if author_id is None:
            raise ValidationException("author_id", "사용자 ID가 필요합니다.")
        score = validate_score(score)
        comment = validate_comment(comment)

        try:
            recipe = await self._lock_recipe(recipe_id)
            if recipe is None:
                logger.warning(f"별점 대상 레시피 없음: recipe_id={recipe_id}, user_id={author_id}")
                raise NotFoundException("레시피")
            if recipe.author_id == author_id:
                logger.warning(f"본인 레시피 별점 시도 거절: recipe_id={recipe_id}, user_id={author_id}")
                raise ForbiddenException("본인 레시피에는 별점을 등록할 수 없습니다.")

            names = await self.users.get_display_names([author_id])
            if author_id not in names:
                raise NotFoundException("사용자")

            rating, created = await self._upsert_rating(recipe_id, author_id, score, comment)
            average, total = await self._recompute_average(recipe_id)
        except IntegrityError as e:
            # 동시 최초 등록이 유니크 제약에 걸린 경우 - 재시도하면 수정으로 처리된다
            logger.warning(f"별점 중복 등록 충돌: recipe_id={recipe_id}, user_id={author_id}, error={str(e)}")
            raise StorageException("별점 등록이 동시에 처리되었습니다. 다시 시도해주세요.") from e
        except SQLAlchemyError as e:
            logger.error(f"별점 등록 SQL 실행 실패: recipe_id={recipe_id}, user_id={author_id}, error={str(e)}")
            raise StorageException("별점 등록 중 저장소 오류가 발생했습니다. 다시 시도해주세요.") from e

        log_with_context(
            logger,
            "info",
            f"별점 {'등록' if created else '수정'} 완료: recipe_id={recipe_id}, user_id={author_id}, "
            f"score={score}, average={average}, total={total}",
            recipe_id=recipe_id,
            user_id=author_id,
            average=average,
            total_ratings=total,
        )
        return RatingResult(
            rating=format_rating_summary(rating, names[author_id]),
            average=average,
            total_ratings=total,
            created=created,
        )

    async def _lock_recipe(self, recipe_id: int):
        """(recipe_id, author_id) 행, 레시피가 없으면 None"""
        return (await self.db.execute(recipe_lock_query(recipe_id))).one_or_none()

    async def _upsert_rating(self, recipe_id: int, author_id: int, score: int, comment: Optional[str]):
        rating = (await self.db.execute(existing_rating_query(recipe_id, author_id))).scalar_one_or_none()

        now = datetime.now()
        if rating is not None:
            rating.rating = score
            rating.comment = comment
            rating.created_at = now
            created = False
        else:
            rating = RecipeRating(
                recipe_id=recipe_id,
                user_id=author_id,
                rating=score,
                comment=comment,
                created_at=now,
            )
            self.db.add(rating)
            created = True

        await self.db.flush()
        logger.debug(f"별점 저장: rating_id={rating.rating_id}, created={created}")
        return rating, created

    async def _recompute_average(self, recipe_id: int):
        """전체 별점 재조회 -> 평균 계산 -> 레시피에 저장"""
        scores = list((await self.db.execute(rating_scores_query(recipe_id))).scalars().all())
        average = compute_average(scores)

        await self.db.execute(
            update(Recipe)
            .where(Recipe.recipe_id == recipe_id)
            .values(average_rating=average)
            .execution_options(synchronize_session="fetch")
        )
        return average, len(scores)
