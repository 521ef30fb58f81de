"""FastAPI 애플리케이션 엔트리포인트 (미들웨어 및 라우터 등록).

FastAPI application entry point: Middleware and router registration.
Under the "local" profile the lifespan hook creates the schema and seeds
sample teams and members.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from member_search.config import settings
from member_search.middleware.axiom_logging import AxiomLoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """시작 시 스키마 생성 및 로컬 샘플 데이터 시드 (Startup schema and seed)."""
    from member_search.database import async_session, create_schema
    from member_search.seed import seed_sample_data

    if settings.CREATE_SCHEMA:
        await create_schema()
    if settings.APP_PROFILE == "local":
        async with async_session() as db:
            await seed_sample_data(db, settings.SAMPLE_MEMBER_COUNT)
    yield


app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# API 로깅 미들웨어 (CORS보다 먼저 등록하여 모든 요청을 캡처)
# Registered before CORS to capture all requests
app.add_middleware(AxiomLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


from member_search.api import api_router  # noqa: E402

app.include_router(api_router)
