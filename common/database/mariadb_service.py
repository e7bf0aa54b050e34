"""
MariaDB 서비스 전반 DB 세션 (service_db)
- 엔진/세션 팩토리는 애플리케이션 팩토리(gateway.main.create_app)가 생성해 app.state에 보관
- 모듈 전역 엔진을 두지 않는다
"""
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from common.database.base_mariadb import MariaBase
from common.logger import get_logger

logger = get_logger("mariadb_service")


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """비동기 엔진 생성"""
    engine = create_async_engine(url, echo=echo, pool_pre_ping=True)
    logger.info(f"MariaDB Service 엔진 생성됨, dialect={engine.dialect.name}")
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """세션 팩토리 생성"""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    """metadata 기준 테이블 생성 (없는 테이블만)"""
    # 모델 import 시 metadata에 테이블이 등록된다
    import services.recipe.models.core_model  # noqa: F401
    import services.user.models.user_model  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(MariaBase.metadata.create_all)
    logger.info("MariaDB 서비스 테이블 생성 완료")


async def get_maria_service_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """MariaDB 서비스용 세션 반환"""
    session_factory = request.app.state.session_factory
    logger.debug("MariaDB 서비스 데이터베이스 세션 생성 중")
    async with session_factory() as session:
        yield session
    logger.debug("MariaDB 서비스 데이터베이스 세션 종료됨")
