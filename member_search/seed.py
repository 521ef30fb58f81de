"""샘플 데이터 시드 스크립트 (팀 2개, 회원 N명 생성).

Seed script: Creates TeamA/TeamB and ``SAMPLE_MEMBER_COUNT`` members.
Runs automatically on startup under the "local" profile, or manually:

Usage:
    python -m member_search.seed

Creates:
    - 2개 팀: TeamA, TeamB (2 teams)
    - N명 회원: Member{i}, 나이 i, 짝수는 TeamA / 홀수는 TeamB
      (N members: Member{i} aged i; even index -> TeamA, odd -> TeamB)
"""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.config import settings
from member_search.database import async_session, create_schema
from member_search.models import Member, Team
from member_search.utils.logging import get_logger

logger = get_logger(__name__)


async def seed_sample_data(db: AsyncSession, member_count: int) -> bool:
    """샘플 팀/회원을 생성합니다. 팀이 이미 있으면 건너뜁니다.

    Insert the sample teams and members into ``db`` and commit.

    Returns:
        bool: 시드 수행 여부 (False when the database already had teams)
    """
    existing = await db.execute(select(Team).limit(1))
    if existing.scalar_one_or_none() is not None:
        logger.info("Sample data already present, skipping")
        return False

    team_a = Team("TeamA")
    team_b = Team("TeamB")
    db.add_all([team_a, team_b])

    for i in range(member_count):
        selected: Team = team_a if i % 2 == 0 else team_b
        db.add(Member(f"Member{i}", i, selected))

    await db.commit()
    logger.info("Seeded sample data", extra={"event": {"teams": 2, "members": member_count}})
    return True


async def seed() -> None:
    """스키마를 만들고 샘플 데이터를 시드합니다 (Create schema, then seed)."""
    await create_schema()
    async with async_session() as db:
        await seed_sample_data(db, settings.SAMPLE_MEMBER_COUNT)


if __name__ == "__main__":
    asyncio.run(seed())
