"""
Query parameter coercion.

역할:
- 쿼리스트링으로 들어온 raw 값을 조회 연산이 기대하는 타입으로 바꾼다.
- 잘못된 값은 거절하지 않고 기본값으로 보정한다 (limit=abc -> 기본 limit).
"""

from typing import Any, Optional


def safe_int(value: Any, default: int) -> int:
    """정수로 해석할 수 없거나 음수면 default."""
    if value is None:
        return default
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 0 else default


def optional_filter(value: Optional[str]) -> Optional[str]:
    """빈 문자열은 '필터 없음'으로 취급."""
    if value is None:
        return None
    value = value.strip()
    return value or None
