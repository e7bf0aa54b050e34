# utils.py
"""
공통 유틸 함수 모음 (쿼리 파라미터 관대한 변환 등)
- 변환 실패 시 예외 대신 None/기본값을 돌려준다
"""
import math
from typing import Any, Optional

from common.logger import get_logger

logger = get_logger("utils")

_TRUE_STRINGS = {"true", "1", "yes", "y", "on", "si", "sí"}
_FALSE_STRINGS = {"false", "0", "no", "n", "off"}


def to_float_or_none(value: Any) -> Optional[float]:
    """숫자로 해석 가능한 값이면 유한 float, 아니면 None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        logger.debug(f"숫자 변환 실패, 미입력으로 처리: value={value!r}")
        return None
    if not math.isfinite(result):
        return None
    return result


def to_int_or_none(value: Any) -> Optional[int]:
    """숫자로 해석 가능한 값이면 내림한 int, 아니면 None"""
    result = to_float_or_none(value)
    return None if result is None else int(math.floor(result))


def to_bool(value: Any, default: bool) -> bool:
    """bool/문자열/숫자를 bool로 해석, 해석 불가 시 default"""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return default


def clean_text(value: Any) -> Optional[str]:
    """앞뒤 공백 제거한 문자열, 비어있거나 문자열이 아니면 None"""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None
