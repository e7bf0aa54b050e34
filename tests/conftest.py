from __future__ import annotations

import asyncio
import os

# 설정은 import 시점에 캐시되므로 앱 모듈보다 먼저 지정
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("MARIADB_SERVICE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from common.config import Settings
from common.database.base_mariadb import MariaBase
from gateway.main import create_app
from services.recipe.models import core_model  # noqa: F401  (create_all 대상 등록)
from services.user.models import user_model  # noqa: F401


# -----------------------------
# 컴포넌트 테스트용 (in-memory)
# -----------------------------

@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(MariaBase.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


# -----------------------------
# HTTP 테스트용 (파일 DB + TestClient)
# -----------------------------

@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'recetas.db'}"


@pytest.fixture
def seed(db_url):
    """async 시드 함수를 받아 별도 이벤트 루프에서 실행하고 결과를 돌려준다"""
    def run(seed_fn):
        async def _run():
            engine = create_async_engine(db_url, poolclass=NullPool)
            try:
                async with engine.begin() as conn:
                    await conn.run_sync(MariaBase.metadata.create_all)
                session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
                async with session_factory() as session:
                    result = await seed_fn(session)
                    await session.commit()
                    return result
            finally:
                await engine.dispose()
        return asyncio.run(_run())
    return run


@pytest.fixture
def client(db_url, seed):
    # 시드가 없는 테스트도 테이블은 있어야 한다
    async def _noop(session):
        return None
    seed(_noop)

    settings = Settings(
        jwt_secret=os.environ["JWT_SECRET"],
        mariadb_service_url=db_url,
        create_tables=False,
        log_level=os.environ["LOG_LEVEL"],
    )
    with TestClient(create_app(settings=settings)) as c:
        yield c
