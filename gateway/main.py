"""
gateway/main.py
---------------
API Gateway 서비스 진입점.
각 서비스의 FastAPI router를 통합해서 전체 API 엔드포인트로 제공한다.
- CORS, 공통 예외처리, 로깅, DB 엔진 생성도 이곳에서 적용
- DB 엔진/세션 팩토리는 app.state.session_factory 로 요청 의존성에 전달
"""
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from common.config import Settings, get_settings
from common.database.mariadb_service import build_engine, build_session_factory, create_tables
from common.errors import DomainException, domain_exception_handler
from common.logger import configure_logging, get_logger
from services.recipe.routers.api_router import router as recipe_router
from services.user.routers.api_router import router as user_router

logger = get_logger("gateway")


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> FastAPI:
    """
    FastAPI 애플리케이션 생성
    - session_factory를 넘기면 그대로 사용 (테스트), 없으면 기동 시 설정의 URL로 엔진 생성
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json_format)
    logger.info(f"FastAPI 애플리케이션 생성: 제목={settings.app_name}, 디버그={settings.debug}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = None
        if getattr(app.state, "session_factory", None) is None:
            engine = build_engine(settings.mariadb_service_url, echo=settings.debug)
            if settings.create_tables:
                await create_tables(engine)
            app.state.session_factory = build_session_factory(engine)
        try:
            yield
        finally:
            if engine is not None:
                await engine.dispose()
                logger.info("DB 엔진 종료")

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.state.session_factory = session_factory

    logger.info("CORS 미들웨어 설정 중...")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DomainException, domain_exception_handler)

    logger.debug("레시피 라우터 포함 중...")
    app.include_router(recipe_router)
    logger.debug("사용자 라우터 포함 중...")
    app.include_router(user_router)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    logger.info("모든 서비스 라우터 등록 완료")
    return app


if __name__ == "__main__":
    uvicorn.run("gateway.main:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
