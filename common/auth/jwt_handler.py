"""
JWT 액세스 토큰 발급/검증
- 로그인(토큰 발급 API)은 인증 서비스 담당, 이 서비스는 Bearer 토큰 검증만 한다
- create_access_token은 같은 시크릿/알고리즘으로 토큰을 만드는 운영·테스트 도구용
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from common.config import get_settings
from common.logger import get_logger
from common.utils import to_int_or_none

logger = get_logger("jwt_handler")


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """data(sub 포함)에 만료시각을 붙여 서명"""
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**data, "exp": datetime.now(timezone.utc) + lifetime}
    logger.debug(f"액세스 토큰 발급: sub={data.get('sub')}")
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> Optional[dict]:
    """서명/만료 검증 후 payload, 실패 시 None"""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"JWT 검증 실패: {e!r}")
        return None


def get_token_user_id(token: str) -> Optional[int]:
    """유효한 토큰의 sub(사용자 ID), 검증 실패나 sub 누락이면 None"""
    payload = verify_token(token)
    if payload is None:
        return None
    return to_int_or_none(payload.get("sub"))
