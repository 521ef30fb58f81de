"""테스트 인프라 (테스트 DB 엔진, 세션, httpx 클라이언트 픽스처).

Test infrastructure: Test database engine, session, and httpx client fixtures.
The database comes from TEST_DATABASE_URL (default: in-memory SQLite via
aiosqlite). The schema is created for each test and dropped afterwards;
every test runs inside one session that is rolled back at the end.
"""

import os
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from member_search.database import Base, get_db
from member_search.main import app
from member_search.models import Member, Team

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


def _create_engine() -> AsyncEngine:
    if TEST_DATABASE_URL.startswith("sqlite"):
        # 인메모리 DB를 모든 연결이 공유하도록 단일 커넥션 풀 사용
        # One shared connection so every session sees the same in-memory DB
        return create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 스키마를 생성하고 종료 시 삭제합니다."""
    eng = _create_engine()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다 (종료 시 롤백)."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 (DB 세션을 오버라이드합니다)."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def teams(db: AsyncSession) -> dict[str, Team]:
    """TeamA, TeamB를 생성합니다."""
    result = {"TeamA": Team("TeamA"), "TeamB": Team("TeamB")}
    db.add_all(result.values())
    await db.flush()
    return result


@pytest_asyncio.fixture
async def members(db: AsyncSession, teams: dict[str, Team]) -> dict[str, Member]:
    """Member1~4 (10, 20, 30, 40세)를 생성합니다. 1,2는 TeamA, 3,4는 TeamB."""
    result = {
        "Member1": Member("Member1", 10, teams["TeamA"]),
        "Member2": Member("Member2", 20, teams["TeamA"]),
        "Member3": Member("Member3", 30, teams["TeamB"]),
        "Member4": Member("Member4", 40, teams["TeamB"]),
    }
    db.add_all(result.values())
    await db.flush()
    return result
