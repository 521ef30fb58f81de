"""회원 레포지토리 (회원 조회, 조건 검색, 페이지 검색, 일괄 처리).

Member Repository: Lookups, dynamic condition search, paged search and
bulk statements for the member table.

Search queries LEFT JOIN member to team so teamless members stay eligible
when no team filter is given, and project rows into ``MemberTeamDto``.
"""

from typing import Any, Sequence

from sqlalchemy import Row, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.models.member import Member, Team
from member_search.repositories.base import BaseRepository
from member_search.repositories.conditions import (
    ConditionBuilder,
    age_eq,
    condition_clauses,
    where_present,
)
from member_search.schemas.member import MemberSearchCondition, MemberTeamDto
from member_search.utils.pagination import Page, PageRequest, apply_sort, resolve_total

# 정렬 가능한 DTO 속성과 컬럼 매핑 (Sortable MemberTeamDto properties)
SORT_COLUMNS: dict[str, Any] = {
    "memberId": Member.id,
    "username": Member.username,
    "age": Member.age,
    "teamId": Team.id,
    "teamName": Team.name,
}


def _to_dto(row: Row[Any]) -> MemberTeamDto:
    return MemberTeamDto(
        member_id=row.member_id,
        username=row.username,
        age=row.age,
        team_id=row.team_id,
        team_name=row.team_name,
    )


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the member table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    # ── 단건/목록 조회 (Single-entity access) ─────────────────────────

    async def find_by_id_query(self, db: AsyncSession, member_id: int) -> Member | None:
        """SELECT 쿼리로 ID 조회 (Look up by id through an explicit SELECT)."""
        return await self.fetch_one(db, select(Member).where(Member.id == member_id))

    async def find_by_username(self, db: AsyncSession, username: str) -> list[Member]:
        """이름이 정확히 일치하는 회원 목록 (Members with an exact username match)."""
        result = await db.execute(select(Member).where(Member.username == username))
        return list(result.scalars().all())

    async def find_one_by_username(self, db: AsyncSession, username: str) -> Member | None:
        """이름으로 회원 한 명을 조회합니다.

        Single-result lookup by username.

        Raises:
            NonUniqueResultError: 같은 이름이 여러 명인 경우 (Several members share the name)
        """
        return await self.fetch_one(db, select(Member).where(Member.username == username))

    async def find_first(self, db: AsyncSession) -> Member | None:
        return await self.fetch_first(db, select(Member))

    async def search_members(
        self,
        db: AsyncSession,
        username: str | None,
        age: int | None,
    ) -> list[Member]:
        """이름/나이 동적 조건으로 회원 엔티티를 검색합니다.

        Entity search where each argument that is not ``None`` adds an
        equality clause (an empty username still filters); with neither
        given every member is returned.
        """
        builder = ConditionBuilder()
        if username is not None:
            builder.and_(Member.username == username)
        builder.and_(age_eq(age))
        result = await db.execute(builder.apply(select(Member)))
        return list(result.scalars().all())

    # ── 조건 검색 (Dynamic condition search) ──────────────────────────

    def _member_team_query(self) -> Select[Any]:
        """회원 + 팀 프로젝션 기본 쿼리 (LEFT JOIN member -> team)."""
        return (
            select(
                Member.id.label("member_id"),
                Member.username,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Member.team)
        )

    async def search(self, db: AsyncSession, condition: MemberSearchCondition) -> list[MemberTeamDto]:
        """검색 조건에 맞는 회원 + 팀 목록을 조회합니다.

        Return every member matching the present condition fields, projected
        into ``MemberTeamDto``. No ordering is applied.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition; absent fields are ignored)

        Returns:
            list[MemberTeamDto]: 검색 결과 (Matching rows)
        """
        query: Select[Any] = where_present(self._member_team_query(), condition_clauses(condition))
        result = await db.execute(query)
        return [_to_dto(row) for row in result.all()]

    async def search_by_builder(self, db: AsyncSession, condition: MemberSearchCondition) -> list[MemberTeamDto]:
        """:meth:`search`와 같은 결과를 조건 빌더로 조립합니다.

        Same result as :meth:`search`, composed with :class:`ConditionBuilder`.
        """
        query: Select[Any] = ConditionBuilder.from_condition(condition).apply(self._member_team_query())
        result = await db.execute(query)
        return [_to_dto(row) for row in result.all()]

    async def count_by_condition(self, db: AsyncSession, condition: MemberSearchCondition) -> int:
        """검색 조건에 맞는 회원 수 (Number of members matching the condition)."""
        query: Select[Any] = select(func.count(Member.id)).select_from(Member).outerjoin(Member.team)
        query = where_present(query, condition_clauses(condition))
        return (await db.execute(query)).scalar() or 0

    # ── 페이지 검색 (Paged search) ───────────────────────────────────

    def _paged_query(self, query: Select[Any], page_request: PageRequest) -> Select[Any]:
        # 회원 ID로 기본 정렬 및 동순위 정렬 (Member id orders by default and breaks ties)
        query = apply_sort(query, page_request, SORT_COLUMNS, default=Member.id)
        return query.offset(page_request.offset).limit(page_request.size)

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """콘텐츠와 전체 개수를 한 번의 쿼리로 조회합니다.

        Fetch the page content and the total in one statement, carrying the
        filtered row count on every row as ``count(*) OVER ()``. A window
        past the last row returns nothing, so the total then comes from
        :meth:`count_by_condition`.
        """
        query: Select[Any] = self._member_team_query().add_columns(func.count().over().label("total"))
        query = where_present(query, condition_clauses(condition))
        rows: Sequence[Row[Any]] = (await db.execute(self._paged_query(query, page_request))).all()

        if rows:
            total: int = rows[0].total
        else:
            total = await self.count_by_condition(db, condition)

        return Page[MemberTeamDto].of([_to_dto(row) for row in rows], page_request, total)

    async def search_page_complex(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
        optimize_count: bool = True,
    ) -> Page[MemberTeamDto]:
        """콘텐츠 쿼리와 카운트 쿼리를 분리하여 조회합니다.

        Fetch content and total with separate statements. With
        ``optimize_count`` the count statement is skipped whenever the total
        can be derived from the content (see ``resolve_total``).
        """
        query: Select[Any] = where_present(self._member_team_query(), condition_clauses(condition))
        rows: Sequence[Row[Any]] = (await db.execute(self._paged_query(query, page_request))).all()
        content: list[MemberTeamDto] = [_to_dto(row) for row in rows]

        total: int = await resolve_total(
            len(content),
            page_request,
            lambda: self.count_by_condition(db, condition),
            optimize_count=optimize_count,
        )
        return Page[MemberTeamDto].of(content, page_request, total)

    # ── 일괄 처리 (Bulk statements) ──────────────────────────────────

    async def bulk_rename_younger_than(self, db: AsyncSession, age: int, username: str) -> int:
        """나이가 ``age`` 미만인 회원의 이름을 일괄 변경 (Rename members younger than age)."""
        return await self.bulk_update(db, Member.age < age, {"username": username})

    async def bulk_add_age(self, db: AsyncSession, delta: int) -> int:
        """모든 회원의 나이에 ``delta``를 더합니다 (Add delta to every member's age)."""
        return await self.bulk_update(db, None, {"age": Member.age + delta})

    async def bulk_delete_older_than(self, db: AsyncSession, age: int) -> int:
        """나이가 ``age`` 초과인 회원을 일괄 삭제 (Delete members older than age)."""
        return await self.bulk_delete(db, Member.age > age)


# 싱글턴 인스턴스 (Singleton instance)
member_repository: MemberRepository = MemberRepository()
