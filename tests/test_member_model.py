"""회원/팀 모델 테스트.

Member/Team model tests: Constructor forms and the bidirectional
team association.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.models import Member, Team


class TestMemberConstruction:
    """생성자 테스트."""

    def test_username_only(self):
        """이름만으로 생성 시 나이 0, 팀 없음."""
        member = Member("Member1")
        assert member.username == "Member1"
        assert member.age == 0
        assert member.team is None

    def test_team_association_is_bidirectional(self):
        """팀을 지정하면 팀의 회원 목록에도 포함."""
        team_a = Team("TeamA")
        member1 = Member("Member1", 10, team_a)
        member2 = Member("Member2", 20, team_a)

        assert member1.team is team_a
        assert team_a.members == [member1, member2]

    def test_change_team_moves_member(self):
        """팀 변경 시 이전 팀 목록에서 제거되고 새 팀 목록에 추가."""
        team_a = Team("TeamA")
        team_b = Team("TeamB")
        member = Member("Member1", 10, team_a)

        member.change_team(team_b)

        assert member.team is team_b
        assert member not in team_a.members
        assert member in team_b.members

    def test_repr_excludes_team(self):
        member = Member("Member1", 10, Team("TeamA"))
        assert repr(member) == "Member(id=None, username=Member1, age=10)"


class TestMemberPersistence:
    """영속화 테스트."""

    async def test_members_persist_with_team(self, db: AsyncSession, members):
        """저장 후 team_id가 채워지고, 팀 없는 회원은 NULL."""
        teamless = Member("Solo", 50)
        db.add(teamless)
        await db.flush()

        result = await db.execute(select(Member).where(Member.team_id.is_(None)))
        assert result.scalars().all() == [teamless]
        assert members["Member1"].team_id == members["Member1"].team.id

    async def test_team_names_need_not_be_unique(self, db: AsyncSession):
        """같은 이름의 팀을 여러 개 저장할 수 있음."""
        db.add_all([Team("TeamA"), Team("TeamA")])
        await db.flush()

        result = await db.execute(select(Team).where(Team.name == "TeamA"))
        assert len(result.scalars().all()) == 2
