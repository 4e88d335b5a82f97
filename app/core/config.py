"""
애플리케이션 설정 관리

Pydantic Settings를 사용하여 환경 변수를 로드합니다.
.env 파일 또는 시스템 환경 변수에서 설정을 읽어옵니다.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정 클래스"""

    # 데이터베이스 설정 (필수, 없으면 서버를 시작하지 않음)
    database_url: str

    # 서버 설정
    host: str = "0.0.0.0"
    port: int = 5000

    # 서비스 설정
    service_name: str = "product-crud"
    cors_origins: str = "*"  # 쉼표로 구분된 origin 목록
    full_update_mode: Literal["merge", "replace"] = "merge"

    # 애플리케이션 설정
    app_env: str = "development"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # 정의되지 않은 환경 변수 무시
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """
        CORS 허용 origin 목록 파싱

        Returns:
            ["*"] 또는 ["https://a.example", "https://b.example", ...]
        """
        origins = [origin.strip() for origin in self.cors_origins.split(",")]
        return [origin for origin in origins if origin] or ["*"]


def get_settings() -> Settings:
    """
    Settings 인스턴스를 반환하는 팩토리 함수
    """
    return Settings()
