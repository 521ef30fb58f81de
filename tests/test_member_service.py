"""회원 서비스 및 시드 테스트.

Member service and seed tests.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from member_search.repositories.member_query_repository import member_query_repository
from member_search.schemas.member import MemberSearchCondition
from member_search.seed import seed_sample_data
from member_search.services.member_service import member_service
from member_search.utils.pagination import PageRequest


class TestMemberService:
    """서비스 테스트."""

    async def test_get_member(self, db: AsyncSession, members):
        assert await member_service.get_member(db, members["Member3"].id) is members["Member3"]

    async def test_get_missing_member_logs(self, db: AsyncSession, members, caplog):
        """없는 회원은 예외 없이 None, 로그만 남김."""
        with caplog.at_level(logging.INFO, logger="member_search.services.member_service"):
            assert await member_service.get_member(db, 9999) is None
        assert "Member not found" in caplog.text

    async def test_page_strategies(self, db: AsyncSession, members):
        condition = MemberSearchCondition(team_name="TeamB")
        page_request = PageRequest.of(0, 1)
        simple = await member_service.search_members_page(db, condition, page_request, strategy="simple")
        complex_ = await member_service.search_members_page(db, condition, page_request)
        assert simple == complex_
        assert simple.total_elements == 2


class TestSeed:
    """샘플 데이터 시드 테스트."""

    async def test_seed_sample_data(self, db: AsyncSession):
        assert await seed_sample_data(db, 100) is True
        assert await member_query_repository.count_members(db) == 100

        team_a = await member_service.search_members(db, MemberSearchCondition(team_name="TeamA"))
        assert len(team_a) == 50
        assert all(int(m.username.removeprefix("Member")) % 2 == 0 for m in team_a)

    async def test_seed_is_skipped_when_present(self, db: AsyncSession):
        await seed_sample_data(db, 4)
        assert await seed_sample_data(db, 4) is False
        assert await member_query_repository.count_members(db) == 4
