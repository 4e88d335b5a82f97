"""
SQLAlchemy 데이터베이스 설정

엔진, 세션 팩토리, Base 클래스를 정의합니다.
엔진은 애플리케이션 시작 시 한 번 생성되어 app.state에 보관되고,
요청마다 get_db 의존성으로 세션이 주입됩니다.
"""

from typing import Generator

from fastapi import Request
from loguru import logger
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    데이터베이스 URL로 SQLAlchemy 엔진을 생성합니다.

    SQLite 사용 시 check_same_thread를 비활성화하고,
    in-memory DB는 StaticPool로 단일 연결을 공유합니다.

    Args:
        database_url: SQLAlchemy 데이터베이스 URL

    Returns:
        Engine 인스턴스
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        options = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return create_engine(url, **options)

    return create_engine(
        url,
        pool_pre_ping=True,  # connection 유효성 자동 체크
        pool_recycle=3600,  # 1시간마다 connection 재생성
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """
    엔진에 바인딩된 세션 팩토리를 생성합니다.

    삭제된 상품을 커밋 후에도 응답에 사용할 수 있도록 expire_on_commit을 끕니다.
    """
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )


def init_db(engine: Engine) -> None:
    """
    연결을 확인하고 테이블과 인덱스를 생성합니다.

    Raises:
        SQLAlchemyError: 데이터베이스에 연결할 수 없는 경우
    """
    # 테이블 메타데이터 등록
    from app.models import Product  # noqa: F401

    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))

    Base.metadata.create_all(bind=engine)
    logger.info("Database connected: {}", engine.url.render_as_string(hide_password=True))


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI 의존성 주입용 데이터베이스 세션 제너레이터

    사용 예:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
