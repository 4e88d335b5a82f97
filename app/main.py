import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import ValidationError

from app.api.errors import register_exception_handlers
from app.api.routes import products
from app.core.config import Settings, get_settings
from app.core.logging import setup_logging
from app.db.database import create_db_engine, create_session_factory, init_db
from app.schemas.product import HealthResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    데이터베이스 엔진 생명주기 관리

    시작 시 엔진을 생성하고 연결을 확인하며, 종료 시 connection pool을 정리합니다.
    연결에 실패하면 예외가 전파되어 서버가 시작되지 않습니다.
    """
    settings: Settings = app.state.settings

    engine = create_db_engine(settings.database_url)
    try:
        init_db(engine)
    except Exception:
        logger.exception("Database connection error")
        engine.dispose()
        raise

    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info("{} started ({})", settings.service_name, settings.app_env)

    yield

    engine.dispose()
    logger.info("{} stopped", settings.service_name)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    FastAPI 애플리케이션 팩토리

    Args:
        settings: 애플리케이션 설정 (생략 시 환경 변수에서 로드)

    사용 예:
        uvicorn app.main:create_app --factory
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)

    app = FastAPI(
        title="Product CRUD API",
        description="상품 리소스 CRUD 서비스 (검색, 정렬, 페이지네이션 지원)",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(products.router, prefix="/api", tags=["products"])

    @app.get("/", response_model=HealthResponse)
    async def root():
        """헬스체크 엔드포인트"""
        now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        return HealthResponse(
            ok=True,
            service=settings.service_name,
            time=now.replace("+00:00", "Z"),
        )

    return app


def run() -> None:
    """
    서버 실행 진입점

    DATABASE_URL이 없으면 서버를 시작하지 않고 종료 코드 1로 종료합니다.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        missing = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
        logger.error("Missing or invalid configuration: {}", ", ".join(missing))
        sys.exit(1)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
