"""
상품 ID 생성 및 형식 검증

ID는 24자리 소문자 16진수 문자열입니다.
앞 8자리는 생성 시각(초), 뒤 16자리는 난수입니다.
"""

import re
import secrets
import time

OBJECT_ID_LENGTH = 24

_OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def new_object_id() -> str:
    """새 상품 ID를 생성합니다."""
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_valid_object_id(value: object) -> bool:
    """
    ID 형식이 올바른지 확인합니다.

    저장소에 접근하기 전에 호출하여 잘못된 ID 요청을 걸러냅니다.

    Example:
        >>> is_valid_object_id("65a1f0c2e4b0a1b2c3d4e5f6")
        True
        >>> is_valid_object_id("not-an-id")
        False
    """
    return isinstance(value, str) and _OBJECT_ID_PATTERN.fullmatch(value) is not None


def normalize_object_id(value: str) -> str:
    """형식 검증을 통과한 ID를 저장 형태(소문자)로 변환합니다."""
    return value.lower()
