"""회원 레포지토리 테스트.

Member repository tests: Single-entity access, dynamic condition search
and the two paged search strategies.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.models import Member
from member_search.repositories.member_repository import member_repository
from member_search.schemas.member import MemberSearchCondition
from member_search.utils.exceptions import BadRequestError, NonUniqueResultError
from member_search.utils.pagination import PageRequest


def usernames(rows) -> list[str | None]:
    return [row.username for row in rows]


class TestBasicAccess:
    """저장/조회 테스트."""

    async def test_save_and_find(self, db: AsyncSession, members):
        """저장 후 ID/전체/이름 조회."""
        member5 = Member("Member5", 10)
        await member_repository.save(db, member5)
        assert member5.id is not None

        assert await member_repository.find_by_id(db, member5.id) is member5
        assert await member_repository.find_by_id_query(db, member5.id) is member5
        assert member5 in await member_repository.find_all(db)
        assert await member_repository.find_by_username(db, "Member5") == [member5]

    async def test_find_missing(self, db: AsyncSession, members):
        """없는 ID/이름 조회는 None 또는 빈 목록."""
        assert await member_repository.find_by_id(db, 9999) is None
        assert await member_repository.find_by_username(db, "Nobody") == []
        assert await member_repository.find_one_by_username(db, "Nobody") is None

    async def test_find_one_non_unique(self, db: AsyncSession, members):
        """같은 이름이 두 명이면 단일 조회 실패."""
        await member_repository.save(db, Member("Twin", 1))
        await member_repository.save(db, Member("Twin", 2))

        with pytest.raises(NonUniqueResultError):
            await member_repository.find_one_by_username(db, "Twin")

    async def test_find_first(self, db: AsyncSession, members):
        assert await member_repository.find_first(db) in members.values()

    async def test_search_members_entities(self, db: AsyncSession, members):
        """이름/나이 동적 조건 엔티티 검색."""
        assert await member_repository.search_members(db, "Member1", 10) == [members["Member1"]]
        assert await member_repository.search_members(db, "Member1", 20) == []
        assert len(await member_repository.search_members(db, None, None)) == 4

    async def test_search_members_empty_username_filters(self, db: AsyncSession, members):
        """빈 문자열 이름도 조건으로 적용 (Only None skips the username clause)."""
        assert await member_repository.search_members(db, "", None) == []
        assert await member_repository.search_members(db, "", 10) == []



class TestSearch:
    """조건 검색 테스트."""

    async def test_team_and_age_range(self, db: AsyncSession, members):
        """TeamB + 35~40세는 Member4만."""
        condition = MemberSearchCondition(team_name="TeamB", age_goe=35, age_loe=40)
        result = await member_repository.search(db, condition)

        assert usernames(result) == ["Member4"]
        assert result[0].team_name == "TeamB"
        assert result[0].member_id == members["Member4"].id

    async def test_age_range_only(self, db: AsyncSession, members):
        result = await member_repository.search(db, MemberSearchCondition(age_goe=35, age_loe=40))
        assert usernames(result) == ["Member4"]

    async def test_team_only(self, db: AsyncSession, members):
        result = await member_repository.search(db, MemberSearchCondition(team_name="TeamB"))
        assert sorted(usernames(result)) == ["Member3", "Member4"]

    async def test_inclusive_bounds(self, db: AsyncSession, members):
        result = await member_repository.search(db, MemberSearchCondition(age_goe=20, age_loe=30))
        assert sorted(usernames(result)) == ["Member2", "Member3"]

    async def test_no_condition_includes_teamless(self, db: AsyncSession, members):
        """조건이 없으면 팀 없는 회원까지 전부."""
        await member_repository.save(db, Member("Solo", 50))
        result = await member_repository.search(db, MemberSearchCondition())

        assert len(result) == 5
        solo = next(row for row in result if row.username == "Solo")
        assert solo.team_id is None
        assert solo.team_name is None

    async def test_team_filter_excludes_teamless(self, db: AsyncSession, members):
        await member_repository.save(db, Member("Solo", 50))
        result = await member_repository.search(db, MemberSearchCondition(team_name="TeamA"))
        assert sorted(usernames(result)) == ["Member1", "Member2"]

    async def test_blank_strings_are_ignored(self, db: AsyncSession, members):
        result = await member_repository.search(db, MemberSearchCondition(username="", team_name="  "))
        assert len(result) == 4

    async def test_builder_matches_where_parameters(self, db: AsyncSession, members):
        """빌더 방식과 where 파라미터 방식의 결과가 같음."""
        for condition in [
            MemberSearchCondition(),
            MemberSearchCondition(team_name="TeamB", age_goe=35, age_loe=40),
            MemberSearchCondition(username="Member2"),
        ]:
            by_params = await member_repository.search(db, condition)
            by_builder = await member_repository.search_by_builder(db, condition)
            assert sorted(by_params, key=lambda r: r.member_id) == sorted(by_builder, key=lambda r: r.member_id)

    async def test_count_by_condition(self, db: AsyncSession, members):
        assert await member_repository.count_by_condition(db, MemberSearchCondition(team_name="TeamA")) == 2


class TestSearchPage:
    """페이지 검색 테스트."""

    async def test_simple_first_page(self, db: AsyncSession, members):
        page = await member_repository.search_page_simple(db, MemberSearchCondition(), PageRequest.of(0, 3))
        assert page.size == 3
        assert usernames(page.content) == ["Member1", "Member2", "Member3"]
        assert page.total_elements == 4
        assert page.total_pages == 2

    async def test_complex_first_page(self, db: AsyncSession, members):
        page = await member_repository.search_page_complex(db, MemberSearchCondition(), PageRequest.of(0, 3))
        assert page.size == 3
        assert usernames(page.content) == ["Member1", "Member2", "Member3"]
        assert page.total_elements == 4

    @pytest.mark.parametrize(
        ("page_index", "size", "condition"),
        [
            (0, 3, MemberSearchCondition()),
            (1, 3, MemberSearchCondition()),
            (5, 3, MemberSearchCondition()),
            (0, 10, MemberSearchCondition()),
            (0, 1, MemberSearchCondition(team_name="TeamB")),
            (1, 1, MemberSearchCondition(team_name="TeamB")),
            (0, 2, MemberSearchCondition(age_goe=100)),
        ],
    )
    async def test_strategies_agree(self, db: AsyncSession, members, page_index, size, condition):
        """두 전략의 콘텐츠와 전체 개수가 같고 전체 검색 결과 수와 일치."""
        page_request = PageRequest.of(page_index, size)
        simple = await member_repository.search_page_simple(db, condition, page_request)
        complex_ = await member_repository.search_page_complex(db, condition, page_request)
        always_count = await member_repository.search_page_complex(
            db, condition, page_request, optimize_count=False
        )
        unpaged = await member_repository.search(db, condition)

        assert simple.content == complex_.content == always_count.content
        assert simple.total_elements == complex_.total_elements == always_count.total_elements == len(unpaged)
        assert len(simple.content) <= size

    async def test_last_partial_page_skips_count(self, db: AsyncSession, members, monkeypatch):
        """마지막 부분 페이지는 카운트 쿼리 없이 전체 개수를 계산."""
        calls: list[MemberSearchCondition] = []
        original = member_repository.count_by_condition

        async def spy(session, condition):
            calls.append(condition)
            return await original(session, condition)

        monkeypatch.setattr(member_repository, "count_by_condition", spy)

        page = await member_repository.search_page_complex(db, MemberSearchCondition(), PageRequest.of(1, 3))
        assert usernames(page.content) == ["Member4"]
        assert page.total_elements == 4
        assert page.last is True
        assert calls == []

        await member_repository.search_page_complex(db, MemberSearchCondition(), PageRequest.of(0, 3))
        assert len(calls) == 1

    async def test_sort(self, db: AsyncSession, members):
        page = await member_repository.search_page_complex(
            db, MemberSearchCondition(), PageRequest.of(0, 4, "age,desc")
        )
        assert usernames(page.content) == ["Member4", "Member3", "Member2", "Member1"]

    async def test_multi_sort(self, db: AsyncSession, members):
        page = await member_repository.search_page_simple(
            db, MemberSearchCondition(), PageRequest.of(0, 4, "teamName,desc", "age")
        )
        assert usernames(page.content) == ["Member3", "Member4", "Member1", "Member2"]

    async def test_ties_ordered_by_member_id(self, db: AsyncSession, members):
        """동순위 정렬 시 회원 ID 순으로 페이지가 겹치지 않음."""
        seen: list[str | None] = []
        for page_index in range(4):
            request = PageRequest.of(page_index, 1, "teamName")
            page = await member_repository.search_page_simple(db, MemberSearchCondition(), request)
            seen.extend(usernames(page.content))
        assert seen == ["Member1", "Member2", "Member3", "Member4"]

    async def test_unknown_sort_property(self, db: AsyncSession, members):

        with pytest.raises(BadRequestError):
            await member_repository.search_page_complex(
                db, MemberSearchCondition(), PageRequest.of(0, 4, "password")
            )
