"""
페이지네이션 계산 유틸 (순수 함수, I/O 없음)
- 잘못된 page/limit 입력은 예외 없이 기본값으로 보정
"""

import math
from dataclasses import dataclass
from typing import Any, Sequence

from common.utils import to_int_or_none

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class PageBounds:
    page: int
    limit: int
    skip: int


def normalize_pagination(page: Any = None, limit: Any = None) -> PageBounds:
    """
    page = max(1, page) (숫자가 아니면 1)
    limit = 1~100 범위로 보정 (숫자가 아니면 10)
    skip = (page - 1) * limit
    """
    page_value = to_int_or_none(page)
    limit_value = to_int_or_none(limit)

    page_value = DEFAULT_PAGE if page_value is None else max(1, page_value)
    limit_value = DEFAULT_LIMIT if limit_value is None else min(MAX_LIMIT, max(1, limit_value))

    return PageBounds(page=page_value, limit=limit_value, skip=(page_value - 1) * limit_value)


def total_pages(total: int, limit: int) -> int:
    """ceil(total / limit), total이 0이면 0"""
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def build_paginated_response(data: Sequence, bounds: PageBounds, total: int) -> dict:
    """{data, total, page, limit, total_pages} 응답 봉투 생성"""
    return {
        "data": list(data),
        "total": total,
        "page": bounds.page,
        "limit": bounds.limit,
        "total_pages": total_pages(total, bounds.limit),
    }
