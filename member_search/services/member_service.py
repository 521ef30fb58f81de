"""회원 서비스 (회원 조회 및 검색 비즈니스 로직).

Member Service: Business logic behind the member search endpoints.
Chooses the paging strategy and logs lookups that find nothing.
"""

from typing import Literal

from sqlalchemy.ext.asyncio import AsyncSession

from member_search.models.member import Member
from member_search.repositories.member_repository import member_repository
from member_search.schemas.member import MemberSearchCondition, MemberTeamDto
from member_search.utils.logging import get_logger
from member_search.utils.pagination import Page, PageRequest

logger = get_logger(__name__)

PageStrategy = Literal["simple", "complex"]


class MemberService:
    """회원 검색 비즈니스 로직을 처리하는 서비스.

    Service handling member lookup and search.
    """

    async def get_member(self, db: AsyncSession, member_id: int) -> Member | None:
        """ID로 회원을 조회합니다. 없으면 로그만 남기고 None을 반환합니다.

        Look up a member; a miss is logged and returned as ``None``,
        the caller decides how to respond.
        """
        member: Member | None = await member_repository.find_by_id(db, member_id)
        if member is None:
            logger.info("Member not found", extra={"event": {"member_id": member_id}})
        return member

    async def search_members(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamDto]:
        """검색 조건에 맞는 회원 전체 목록 (Unpaged search)."""
        return await member_repository.search(db, condition)

    async def search_members_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
        strategy: PageStrategy = "complex",
    ) -> Page[MemberTeamDto]:
        """검색 조건에 맞는 회원 페이지를 조회합니다.

        Paged search. ``complex`` issues content and count separately and
        skips the count when it can; ``simple`` reads both in one statement.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            page_request: 페이지 요청 (Page index, size and sort)
            strategy: 페이지 조회 방식 (Paging strategy)

        Returns:
            Page[MemberTeamDto]: 페이지 결과 (Page envelope)
        """
        if strategy == "simple":
            return await member_repository.search_page_simple(db, condition, page_request)
        return await member_repository.search_page_complex(db, condition, page_request)


# 싱글턴 인스턴스 (Singleton instance)
member_service: MemberService = MemberService()
