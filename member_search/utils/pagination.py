"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the page request / page envelope models, sort application,
and the total-count resolution shared by the paged search strategies.

Pages are zero-based: page 0 covers rows ``[0, size)``.
"""

import math
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy import Select

from member_search.utils.exceptions import BadRequestError

T = TypeVar("T")


class SortOrder(BaseModel):
    """정렬 조건 (Single sort criterion: property name + direction)."""

    property: str
    direction: Literal["asc", "desc"] = "asc"

    @classmethod
    def parse(cls, raw: str) -> "SortOrder":
        """``"age,desc"`` 형식의 정렬 파라미터를 파싱합니다.

        Parse a ``property[,asc|desc]`` sort parameter.

        Raises:
            BadRequestError: 방향 값이 잘못된 경우 (Unknown direction)
        """
        parts: list[str] = [p.strip() for p in raw.split(",") if p.strip()]
        if not parts:
            raise BadRequestError(f"Invalid sort parameter: '{raw}'")
        if len(parts) == 1:
            return cls(property=parts[0])
        direction: str = parts[1].lower()
        if direction not in ("asc", "desc") or len(parts) > 2:
            raise BadRequestError(f"Invalid sort direction in '{raw}'")
        return cls(property=parts[0], direction=direction)  # type: ignore[arg-type]


class PageRequest(BaseModel):
    """페이지 요청 모델.

    Page request: zero-based page index, page size and sort criteria.

    Attributes:
        page: 페이지 번호, 0부터 시작 (Page index, 0-based)
        size: 페이지당 항목 수 (Items per page)
        sort: 정렬 조건 목록 (Sort criteria, applied in order)
    """

    page: int = Field(0, ge=0)
    size: int = Field(20, ge=1)
    sort: list[SortOrder] = Field(default_factory=list)

    @classmethod
    def of(cls, page: int, size: int, *sort: str) -> "PageRequest":
        return cls(page=page, size=size, sort=[SortOrder.parse(s) for s in sort])

    @property
    def offset(self) -> int:
        """조회 시작 위치 (Row offset of the first item on this page)."""
        return self.page * self.size


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Page envelope returned by paged endpoints, serialized in camelCase.

    Attributes:
        content: 현재 페이지 항목 목록 (Items for the current page)
        total_elements: 전체 항목 수 (Total count across all pages)
        total_pages: 전체 페이지 수 (Total number of pages)
        number: 현재 페이지 번호, 0부터 시작 (Current page, 0-based)
        size: 페이지 크기 (Requested page size)
        number_of_elements: 현재 페이지 항목 수 (Items on this page)
        first: 첫 페이지 여부 (Whether this is the first page)
        last: 마지막 페이지 여부 (Whether this is the last page)
        empty: 현재 페이지가 비었는지 (Whether this page has no items)
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: list[T]
    total_elements: int
    total_pages: int
    number: int
    size: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool

    @classmethod
    def of(cls, content: Sequence[T], page_request: PageRequest, total: int) -> "Page[T]":
        """콘텐츠, 페이지 요청, 전체 개수로 페이지를 구성합니다.

        Build a page from its content, the page request and the total count.
        """
        total_pages: int = math.ceil(total / page_request.size) if total else 0
        return cls(
            content=list(content),
            total_elements=total,
            total_pages=total_pages,
            number=page_request.page,
            size=page_request.size,
            number_of_elements=len(content),
            first=page_request.page == 0,
            last=page_request.page + 1 >= total_pages,
            empty=len(content) == 0,
        )


def apply_sort(
    query: Select[Any],
    page_request: PageRequest,
    columns: Mapping[str, Any],
    default: Any | None = None,
) -> Select[Any]:
    """페이지 요청의 정렬 조건을 쿼리에 적용합니다.

    Apply the page request's sort criteria to ``query``. Property names are
    resolved through ``columns``. ``default`` orders the rows when no sort
    is given and is appended after an explicit sort to break ties.

    Raises:
        BadRequestError: 정렬할 수 없는 속성 (Unknown sort property)
    """
    if not page_request.sort:
        return query.order_by(default) if default is not None else query

    for order in page_request.sort:
        column: Any | None = columns.get(order.property)
        if column is None:
            raise BadRequestError(f"No sortable property '{order.property}'")
        query = query.order_by(column.desc() if order.direction == "desc" else column.asc())
    # 동순위 행의 순서 고정 (Stable order among ties)
    return query.order_by(default) if default is not None else query


async def resolve_total(
    content_size: int,
    page_request: PageRequest,
    count: Callable[[], Awaitable[int]],
    optimize_count: bool = True,
) -> int:
    """페이지의 전체 개수를 계산합니다 (가능하면 COUNT 쿼리 생략).

    Resolve the total count for a page. When ``optimize_count`` is set the
    count query is skipped if the total follows from the content alone:

    - first page with fewer rows than the page size: total = content size
    - non-empty partial page past the first: total = offset + content size

    Otherwise ``count()`` is awaited. Both paths yield the same total.
    """
    if optimize_count:
        if page_request.offset == 0:
            if content_size < page_request.size:
                return content_size
        elif 0 < content_size < page_request.size:
            return page_request.offset + content_size

    return await count()
