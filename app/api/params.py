"""
목록 조회 쿼리 파라미터 정규화

page/limit 값은 잘못된 입력이어도 오류 없이 기본값이나 허용 범위로 보정합니다.
"""

import math
import re
from typing import Optional

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# (page - 1) * limit가 64비트 정수 OFFSET 범위를 넘지 않는 최대 페이지
MAX_PAGE = (2**63 - 1) // MAX_LIMIT

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(value: Optional[str]) -> Optional[int]:
    """
    문자열 앞부분의 정수를 파싱합니다.

    Example:
        >>> parse_int("3abc")
        3
        >>> parse_int("2.9")
        2
        >>> parse_int("abc") is None
        True
    """
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def resolve_page(value: Optional[str]) -> int:
    """page 파라미터를 [1, MAX_PAGE] 범위로 보정합니다 (0, 음수, 잘못된 값 → 1)."""
    return min(max(parse_int(value) or DEFAULT_PAGE, 1), MAX_PAGE)


def resolve_limit(value: Optional[str]) -> int:
    """limit 파라미터를 [1, 100] 범위로 보정합니다 (0, 잘못된 값 → 10)."""
    return min(max(parse_int(value) or DEFAULT_LIMIT, 1), MAX_LIMIT)


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit)
