"""
pytest 픽스처 정의
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.db.database import Base, create_db_engine, create_session_factory
from app.main import create_app
from app.models import Product  # noqa: F401


@pytest.fixture(scope="session")
def settings():
    """테스트용 설정 객체 픽스처 (in-memory SQLite)"""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        log_level="WARNING",
        app_env="test",
    )


@pytest.fixture(scope="function")
def test_db() -> Session:
    """
    테스트용 in-memory SQLite 데이터베이스 세션 픽스처

    각 테스트 함수마다 새로운 데이터베이스를 생성하고,
    테스트 종료 후 테이블을 삭제하여 격리를 보장합니다.
    """
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)

    db = create_session_factory(engine)()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def test_client(settings):
    """
    FastAPI TestClient 픽스처

    테스트마다 애플리케이션을 새로 생성하므로 in-memory DB도 매번 비어 있습니다.
    """
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture(scope="function")
def replace_client(settings):
    """PUT을 전체 교체(replace) 방식으로 처리하는 TestClient 픽스처"""
    replace_settings = settings.model_copy(update={"full_update_mode": "replace"})
    with TestClient(create_app(replace_settings)) as client:
        yield client


@pytest.fixture
def create_product(test_client):
    """API를 통해 상품을 생성하고 응답 JSON을 반환하는 헬퍼 픽스처"""

    def _create(client=None, **fields):
        payload = {"name": "Red Shoe", "price": 59.9}
        payload.update(fields)
        response = (client or test_client).post("/api/products", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
