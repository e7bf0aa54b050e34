"""
인증 관련 FastAPI 의존성
- 토큰 발급은 인증 서비스 담당, 여기서는 Bearer 토큰 검증 후 사용자만 확인
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.auth.jwt_handler import get_token_user_id
from common.database.mariadb_service import get_maria_service_db
from common.errors import NotAuthenticatedException, StorageException
from common.logger import get_logger
from services.user.crud.user_read_crud import get_user_by_id
from services.user.schemas.user_schema import UserOut

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/user/login", auto_error=False)
logger = get_logger("dependencies")


async def _resolve_user(token: str, db: AsyncSession) -> UserOut:
    user_id = get_token_user_id(token)
    if user_id is None:
        logger.warning("토큰 검증 실패: 서명/만료 오류 또는 사용자 ID 누락")
        raise NotAuthenticatedException("유효하지 않은 토큰입니다.")

    try:
        user = await get_user_by_id(db, user_id)
    except SQLAlchemyError as e:
        logger.error(f"인증 사용자 조회 실패: user_id={user_id}, error={str(e)}")
        raise StorageException() from e
    if user is None:
        logger.warning(f"사용자를 찾을 수 없음: user_id={user_id}")
        raise NotAuthenticatedException("존재하지 않는 사용자입니다.")

    logger.debug(f"사용자 인증 성공: user_id={user_id}")
    return UserOut.model_validate(user)


async def get_current_user(
        token: Optional[str] = Depends(oauth2_scheme),
        db: AsyncSession = Depends(get_maria_service_db),
) -> UserOut:
    """토큰 기반 사용자 인증 후 유저 정보 반환 (토큰 필수)"""
    if not token:
        raise NotAuthenticatedException()
    return await _resolve_user(token, db)


async def get_optional_user(
        token: Optional[str] = Depends(oauth2_scheme),
        db: AsyncSession = Depends(get_maria_service_db),
) -> Optional[UserOut]:
    """
    토큰이 없으면 익명(None)
    토큰이 있는데 유효하지 않으면 401 (잘못된 토큰을 익명으로 취급하지 않음)
    """
    if not token:
        return None
    return await _resolve_user(token, db)
