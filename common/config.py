# common/config.py

import os
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.logger import get_logger

logger = get_logger("config")


class Settings(BaseSettings):
    jwt_secret: str = Field(..., description="JWT 서명 시크릿")
    jwt_algorithm: str = Field("HS256")
    access_token_expire_minutes: int = Field(60 * 24)

    mariadb_service_url: str = Field(..., description="mysql+asyncmy://user:pw@host:port/db")
    create_tables: bool = Field(False, description="기동 시 스키마 생성 여부")

    app_name: str = Field("Recetas API")
    debug: bool = Field(False)

    log_level: str = Field("INFO")
    log_json_format: bool = Field(False)
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:8081"])

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(__file__), "..", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",  # 정의되지 않은 환경변수 무시
    )


@lru_cache()
def get_settings() -> Settings:
    logger.debug("환경 변수에서 애플리케이션 설정 로드 중")
    try:
        settings = Settings()
        logger.info(f"설정 로드 완료: 앱명={settings.app_name}, 디버그={settings.debug}")
        return settings
    except Exception as e:
        logger.error(f"설정 로드 실패: {str(e)}")
        raise
