"""동적 검색 조건 조립 모듈.

Dynamic predicate composition for member queries. Two equivalent styles:

- where parameters: one helper per field returning a clause, or ``None``
  when the input is absent; ``where_present`` drops the ``None`` entries.
- builder: :class:`ConditionBuilder` accumulates clauses and combines them
  with AND, skipping absent ones.

Clauses on ``Team`` assume the query joins ``Member.team``.
"""

from collections.abc import Iterable
from typing import Any

from sqlalchemy import ColumnElement, Select, and_

from member_search.models.member import Member, Team
from member_search.schemas.member import MemberSearchCondition

Clause = ColumnElement[bool]


def has_text(value: str | None) -> bool:
    """공백이 아닌 문자가 있는지 확인 (True if the string has a non-blank char)."""
    return value is not None and value.strip() != ""


def username_eq(username: str | None) -> Clause | None:
    return Member.username == username if has_text(username) else None


def team_name_eq(team_name: str | None) -> Clause | None:
    return Team.name == team_name if has_text(team_name) else None


def age_eq(age: int | None) -> Clause | None:
    return Member.age == age if age is not None else None


def age_goe(age_goe: int | None) -> Clause | None:
    return Member.age >= age_goe if age_goe is not None else None


def age_loe(age_loe: int | None) -> Clause | None:
    return Member.age <= age_loe if age_loe is not None else None


def condition_clauses(condition: MemberSearchCondition) -> list[Clause | None]:
    """검색 조건의 네 필드를 절 목록으로 변환 (absent fields map to None)."""
    return [
        username_eq(condition.username),
        team_name_eq(condition.team_name),
        age_goe(condition.age_goe),
        age_loe(condition.age_loe),
    ]


def where_present(query: Select[Any], clauses: Iterable[Clause | None]) -> Select[Any]:
    """None이 아닌 절만 WHERE에 AND로 적용합니다.

    Apply every non-``None`` clause to ``query``; with none left the query
    is returned unchanged.
    """
    present: list[Clause] = [c for c in clauses if c is not None]
    return query.where(*present) if present else query


class ConditionBuilder:
    """AND 조건 누적 빌더.

    Accumulates zero or more clauses into one conjunction. ``None`` clauses
    are ignored, so callers can pass helper results straight in::

        builder = ConditionBuilder()
        builder.and_(username_eq(name)).and_(age_eq(age))
        query = builder.apply(select(Member))
    """

    def __init__(self, initial: Clause | None = None) -> None:
        self._clauses: list[Clause] = []
        self.and_(initial)

    def and_(self, clause: Clause | None) -> "ConditionBuilder":
        if clause is not None:
            self._clauses.append(clause)
        return self

    def has_value(self) -> bool:
        return bool(self._clauses)

    def build(self) -> Clause | None:
        """누적된 절의 AND 결합, 절이 없으면 None (Conjunction, or None if empty)."""
        if not self._clauses:
            return None
        if len(self._clauses) == 1:
            return self._clauses[0]
        return and_(*self._clauses)

    def apply(self, query: Select[Any]) -> Select[Any]:
        predicate: Clause | None = self.build()
        return query.where(predicate) if predicate is not None else query

    @classmethod
    def from_condition(cls, condition: MemberSearchCondition) -> "ConditionBuilder":
        builder = cls()
        if has_text(condition.username):
            builder.and_(Member.username == condition.username)
        if has_text(condition.team_name):
            builder.and_(Team.name == condition.team_name)
        if condition.age_goe is not None:
            builder.and_(Member.age >= condition.age_goe)
        if condition.age_loe is not None:
            builder.and_(Member.age <= condition.age_loe)
        return builder
