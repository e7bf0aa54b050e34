# errors.py
"""
공통 에러 타입 정의
- 도메인 컴포넌트는 아래 타입만 raise 하고, gateway에 등록된 핸들러가 HTTP 응답으로 변환한다
- 응답 매핑은 메시지가 아니라 타입(status_code, code)으로 결정
"""
from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse

from common.logger import get_logger

logger = get_logger("errors")


class DomainException(Exception):
    """도메인 에러 공통 부모"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    retryable: bool = False

    def __init__(self, detail: str, field: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.field = field


class ValidationException(DomainException):
    """400 에러 - 입력값 제약 위반 (field에 위반 항목 이름)"""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"

    def __init__(self, field: str, detail: str):
        super().__init__(detail, field=field)


class NotAuthenticatedException(DomainException):
    """401 에러 - 인증 실패"""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "not_authenticated"

    def __init__(self, detail: str = "인증이 필요합니다."):
        super().__init__(detail)


class ForbiddenException(DomainException):
    """403 에러 - 권한 없음"""
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class NotFoundException(DomainException):
    """404 에러 - 항목 없음"""
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"

    def __init__(self, name: str = "데이터"):
        super().__init__(f"{name}을(를) 찾을 수 없습니다.")


class StorageException(DomainException):
    """503 에러 - 일시적 저장소 오류 (재시도 가능)"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "storage_unavailable"
    retryable = True

    def __init__(self, detail: str = "저장소 처리 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요."):
        super().__init__(detail)


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """DomainException -> JSON 응답 변환"""
    logger.debug(f"도메인 에러 응답: path={request.url.path}, code={exc.code}, field={exc.field}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, NotAuthenticatedException) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "code": exc.code,
            "field": exc.field,
            "retryable": exc.retryable,
        },
        headers=headers,
    )
