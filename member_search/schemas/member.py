"""회원 검색 관련 Pydantic 스키마 정의.

Member search request/response schema definitions.
Response shapes are serialized in camelCase (``memberId``, ``teamName``)
and can be populated either by field name or by alias.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MemberSearchCondition(BaseModel):
    """회원 검색 조건 (모든 필드 선택).

    Member search condition. Every field is optional; an absent field
    (``None``, or a blank string for the text fields) adds no constraint.

    Attributes:
        username: 회원 이름 일치 (Exact username match)
        team_name: 팀 이름 일치 (Exact team name match)
        age_goe: 최소 나이, 포함 (Inclusive lower age bound)
        age_loe: 최대 나이, 포함 (Inclusive upper age bound)
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str | None = None
    team_name: str | None = None
    age_goe: int | None = None
    age_loe: int | None = None


class MemberTeamDto(BaseModel):
    """회원 + 팀 프로젝션 응답 스키마.

    Read-only projection of a member joined with its team.
    Team fields are ``None`` for teamless members.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    member_id: int  # 회원 ID (Member id)
    username: str | None  # 회원 이름 (Member username, nullable)
    age: int  # 나이 (Age)
    team_id: int | None  # 팀 ID (Team id, None when teamless)
    team_name: str | None  # 팀 이름 (Team name, None when teamless)


class MemberDto(BaseModel):
    """회원 이름/나이 프로젝션 (Username and age projection)."""

    username: str | None
    age: int


class UserDto(BaseModel):
    """별칭 프로젝션 (username -> name alias projection)."""

    name: str | None
    age: int


class MemberAgeStats(BaseModel):
    """회원 나이 집계 결과 (Aggregate statistics over member ages).

    ``avg`` is a float regardless of the driver's numeric type; the other
    aggregates are ``None`` on an empty table except ``count``.
    """

    count: int
    sum: int | None
    avg: float | None
    max: int | None
    min: int | None


class TeamAgeAverage(BaseModel):
    """팀별 평균 나이 (Average member age per team name)."""

    team_name: str
    avg_age: float
