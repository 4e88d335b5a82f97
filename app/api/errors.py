"""
전역 에러 핸들러

처리되지 않은 모든 예외를 {"message": ...} 형태의 JSON 응답으로 변환합니다.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException

SERVER_ERROR_MESSAGE = "Server error"


def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"message": message}, headers=headers
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """애플리케이션 예외 → status_code와 메시지 (5xx는 일반 메시지)"""
    if exc.status_code >= 500:
        logger.opt(exception=exc).error(
            "Error on {} {}: {}", request.method, request.url.path, exc.message
        )
        return _error_response(exc.status_code, SERVER_ERROR_MESSAGE)

    return _error_response(exc.status_code, exc.message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """라우트 핸들러의 HTTPException 및 404/405 라우팅 오류"""
    return _error_response(
        exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 파싱 실패 (잘못된 JSON 등) → 400 Bad Request"""
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        errors.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))

    return _error_response(
        status.HTTP_400_BAD_REQUEST, f"Invalid request: {'; '.join(errors)}"
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상하지 못한 예외 → 500 Internal Server Error"""
    logger.opt(exception=exc).error(
        "Unhandled error on {} {}", request.method, request.url.path
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """애플리케이션에 에러 핸들러를 등록합니다."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
