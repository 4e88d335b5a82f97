"""
loguru 기반 로깅 설정
"""

import sys

from loguru import logger

from app.core.config import Settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging(settings: Settings) -> None:
    """
    기본 핸들러를 제거하고 stderr 핸들러를 설정 레벨로 다시 등록합니다.

    여러 번 호출해도 핸들러가 중복 등록되지 않습니다.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        colorize=settings.app_env == "development",
        format=LOG_FORMAT,
        level=settings.log_level.upper(),
    )
