"""회원 쿼리 예제 레포지토리 (정렬, 페이징, 집계, 조인, 프로젝션).

Member query repository: Sorting, windowing, aggregation, join and
projection queries over the member/team tables.
"""

from typing import Any

from sqlalchemy import Select, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from member_search.models.member import Member, Team
from member_search.repositories.base import BaseRepository
from member_search.schemas.member import MemberAgeStats, MemberDto, TeamAgeAverage, UserDto


class MemberQueryRepository(BaseRepository[Member]):
    """회원/팀 조회 쿼리 모음.

    Read-only query shapes over members and teams.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    async def find_by_username_and_age(self, db: AsyncSession, username: str, age: int) -> Member | None:
        """이름과 나이가 모두 일치하는 회원 한 명 (Single member matching both fields).

        Raises:
            NonUniqueResultError: 여러 명이 일치하는 경우 (Several members match)
        """
        query: Select[Any] = select(Member).where(Member.username == username, Member.age == age)
        return await self.fetch_one(db, query)

    # ── 정렬/페이징 (Sorting and windowing) ──────────────────────────

    async def find_sorted_by_age(self, db: AsyncSession, age: int) -> list[Member]:
        """나이 내림차순, 이름 오름차순(NULL은 마지막) 정렬.

        Members of the given age, ordered by age descending then username
        ascending with NULL usernames last.
        """
        query: Select[Any] = (
            select(Member)
            .where(Member.age == age)
            .order_by(Member.age.desc(), Member.username.asc().nulls_last())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_window(self, db: AsyncSession, offset: int, limit: int) -> list[Member]:
        """이름순 정렬 후 offset/limit 구간 조회 (offset is zero-based)."""
        query: Select[Any] = (
            select(Member)
            .order_by(Member.username.asc().nulls_last())
            .offset(offset)
            .limit(limit)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def count_members(self, db: AsyncSession) -> int:
        return await self.count(db)

    # ── 집계 (Aggregation) ──────────────────────────────────────────

    async def age_statistics(self, db: AsyncSession) -> MemberAgeStats:
        """회원 나이 집계 (count, sum, avg, max, min over member ages)."""
        query: Select[Any] = select(
            func.count(Member.id).label("age_count"),
            func.sum(Member.age).label("age_sum"),
            func.avg(Member.age).label("age_avg"),
            func.max(Member.age).label("age_max"),
            func.min(Member.age).label("age_min"),
        )
        # Row는 튜플이므로 count/index 같은 라벨은 피함 (Row is a tuple; avoid labels like "count")
        row = (await db.execute(query)).one()
        return MemberAgeStats(
            count=row.age_count,
            sum=row.age_sum,
            avg=float(row.age_avg) if row.age_avg is not None else None,
            max=row.age_max,
            min=row.age_min,
        )

    async def average_age_by_team(self, db: AsyncSession) -> list[TeamAgeAverage]:
        """팀 이름별 평균 나이 (Average age grouped by team name, teamless excluded)."""
        query: Select[Any] = (
            select(Team.name.label("team_name"), func.avg(Member.age).label("avg_age"))
            .select_from(Member)
            .join(Member.team)
            .group_by(Team.name)
            .order_by(Team.name)
        )
        result = await db.execute(query)
        return [TeamAgeAverage(team_name=row.team_name, avg_age=float(row.avg_age)) for row in result.all()]

    # ── 조인 (Joins) ────────────────────────────────────────────────

    async def find_by_team_name(self, db: AsyncSession, team_name: str) -> list[Member]:
        """팀 이름으로 내부 조인 (Inner join on team name; team is populated)."""
        query: Select[Any] = (
            select(Member)
            .join(Member.team)
            .options(contains_eager(Member.team))
            .where(Team.name == team_name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_with_team_joined_on(self, db: AsyncSession, team_name: str) -> list[tuple[Member, Team | None]]:
        """ON 절 필터를 둔 외부 조인.

        LEFT JOIN with the team-name filter in the ON clause: every member
        is returned, paired with its team only when the team matches.
        """
        query: Select[Any] = (
            select(Member, Team)
            .outerjoin(Team, and_(Member.team_id == Team.id, Team.name == team_name))
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def find_named_after_team(self, db: AsyncSession) -> list[Member]:
        """세타 조인: 이름이 팀 이름과 같은 회원.

        Theta join between unrelated columns (member.username = team.name).
        """
        query: Select[Any] = (
            select(Member)
            .select_from(Member)
            .join(Team, Member.username == Team.name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_outer_joined_by_name(self, db: AsyncSession) -> list[tuple[Member, Team | None]]:
        """연관관계 없는 외부 조인 (Outer join on username = team name, no FK)."""
        query: Select[Any] = (
            select(Member, Team)
            .outerjoin(Team, Member.username == Team.name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    # ── 프로젝션 (Projections) ──────────────────────────────────────

    async def find_usernames(self, db: AsyncSession) -> list[str | None]:
        result = await db.execute(select(Member.username).order_by(Member.id))
        return list(result.scalars().all())

    async def find_username_age_pairs(self, db: AsyncSession) -> list[tuple[str | None, int]]:
        result = await db.execute(select(Member.username, Member.age).order_by(Member.id))
        return [(row.username, row.age) for row in result.all()]

    async def find_member_dtos(self, db: AsyncSession) -> list[MemberDto]:
        result = await db.execute(select(Member.username, Member.age).order_by(Member.id))
        return [MemberDto(username=row.username, age=row.age) for row in result.all()]

    async def find_user_dtos(self, db: AsyncSession) -> list[UserDto]:
        """username을 name 별칭으로 조회 (username aliased as ``name``)."""
        result = await db.execute(select(Member.username.label("name"), Member.age).order_by(Member.id))
        return [UserDto(name=row.name, age=row.age) for row in result.all()]


# 싱글턴 인스턴스 (Singleton instance)
member_query_repository: MemberQueryRepository = MemberQueryRepository()
