"""FastAPI 의존성 주입 모듈 (쿼리 파라미터 바인딩).

FastAPI dependency injection module: Binds query parameters to the
search condition and page request. Type errors (e.g. ``ageGoe=abc``) are
rejected by FastAPI with 422 before any of this runs, as are
numbers outside the range the database columns and offsets can hold.
"""

from typing import Annotated

from fastapi import Query

from member_search.config import settings
from member_search.schemas.member import MemberSearchCondition
from member_search.utils.pagination import PageRequest, SortOrder

# DB 정수 범위 (INTEGER column range for age filters)
INT_MIN: int = -(2**31)
INT_MAX: int = 2**31 - 1

# offset = page * size 가 BIGINT 범위를 넘지 않도록 제한
# Upper bound on page so the offset stays within BIGINT
MAX_PAGE_INDEX: int = (2**63 - 1) // settings.MAX_PAGE_SIZE


def get_search_condition(
    username: Annotated[str | None, Query()] = None,
    team_name: Annotated[str | None, Query(alias="teamName")] = None,
    age_goe: Annotated[int | None, Query(alias="ageGoe", ge=INT_MIN, le=INT_MAX)] = None,
    age_loe: Annotated[int | None, Query(alias="ageLoe", ge=INT_MIN, le=INT_MAX)] = None,
) -> MemberSearchCondition:
    """쿼리 파라미터로 검색 조건을 구성합니다.

    Build the search condition from ``username``, ``teamName``, ``ageGoe``
    and ``ageLoe``; missing parameters stay ``None``.
    """
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


def get_page_request(
    page: Annotated[int, Query(ge=0, le=MAX_PAGE_INDEX)] = 0,
    size: Annotated[int | None, Query(ge=1)] = None,
    sort: Annotated[list[str] | None, Query()] = None,
) -> PageRequest:
    """페이지 요청을 구성합니다.

    Build the page request. ``page`` is zero-based, ``size`` defaults to
    ``DEFAULT_PAGE_SIZE`` and is capped at ``MAX_PAGE_SIZE``, and ``sort``
    may repeat as ``property[,asc|desc]``.

    Raises:
        BadRequestError: 정렬 파라미터 형식 오류 (Malformed sort parameter)
    """
    page_size: int = min(size or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    return PageRequest(
        page=page,
        size=page_size,
        sort=[SortOrder.parse(s) for s in sort or []],
    )
