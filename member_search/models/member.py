"""회원/팀 SQLAlchemy ORM 모델 정의.

Member/Team SQLAlchemy ORM model definitions.
A member belongs to at most one team (many-to-one); the team keeps the
inverse one-to-many collection, which is not the owning side.

Tables:
    - team: 팀 (Teams, name is not unique)
    - member: 회원 (Members, nullable FK to team)
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from member_search.database import Base


class Team(Base):
    """팀 모델.

    Team model. ``members`` is the inverse side of ``Member.team`` and is
    maintained through ``back_populates``; the foreign key lives on member.

    Attributes:
        id: 고유 식별자 (Surrogate key)
        name: 팀 이름, 중복 허용 (Team name, duplicates allowed)

    Relationships:
        members: 소속 회원 목록 (Members of this team, no cascade delete)
    """

    __tablename__ = "team"

    # 팀 고유 식별자 (Auto-increment surrogate key)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 팀 이름 (Team display name)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    members: Mapped[list["Member"]] = relationship(back_populates="team")

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Team(id={self.id}, name={self.name})"


class Member(Base):
    """회원 모델.

    Member model. A member may be teamless. When a team is passed to the
    constructor the association is set through :meth:`change_team`, so the
    member also shows up in ``team.members``.

    Attributes:
        id: 고유 식별자 (Surrogate key)
        username: 회원 이름, NULL 허용 (Display name, nullable)
        age: 나이 (Age)
        team_id: 소속 팀 FK, NULL 허용 (Owning team FK, nullable)

    Relationships:
        team: 소속 팀 (Team the member belongs to, or None)
    """

    __tablename__ = "member"

    # 회원 고유 식별자 (Auto-increment surrogate key)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 회원 이름 (Nullable display name)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 나이 (Age in years)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 소속 팀 FK (No ON DELETE rule: team rows are never removed while referenced)
    team_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("team.id"), nullable=True, index=True)

    team: Mapped[Team | None] = relationship(back_populates="members")

    def __init__(self, username: str | None = None, age: int = 0, team: Team | None = None) -> None:
        self.username = username
        self.age = age
        if team is not None:
            self.change_team(team)

    def change_team(self, team: Team) -> None:
        """소속 팀을 변경합니다 (양방향 연관관계 설정).

        Set the owning team. ``back_populates`` appends the member to
        ``team.members`` when that collection is loaded, and queues the
        append otherwise, so both sides agree without an extra load.
        """
        self.team = team

    def __repr__(self) -> str:
        # team은 순환 참조 방지를 위해 제외 (Team omitted to avoid recursion)
        return f"Member(id={self.id}, username={self.username}, age={self.age})"
