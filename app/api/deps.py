"""
FastAPI 의존성 주입 함수들

데이터베이스 세션과 애플리케이션 설정을 제공합니다.
"""

from fastapi import Request

from app.core.config import Settings
from app.db.database import get_db

__all__ = ["get_db", "get_app_settings"]


def get_app_settings(request: Request) -> Settings:
    """
    애플리케이션 생성 시 주입된 설정을 반환하는 의존성 함수

    Example:
        @router.put("/products/{product_id}")
        def update(settings: Settings = Depends(get_app_settings)):
            return settings.full_update_mode
    """
    return request.app.state.settings
