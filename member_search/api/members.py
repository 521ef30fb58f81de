"""회원 검색 라우터 (v1 전체 목록, v2 페이지).

Member search router.

- ``GET /v1/members``: every member matching the condition, as a JSON array
- ``GET /v2/members``: the same search as a page envelope
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.api.deps import get_page_request, get_search_condition
from member_search.database import get_db
from member_search.schemas.member import MemberSearchCondition, MemberTeamDto
from member_search.services.member_service import member_service
from member_search.utils.pagination import Page, PageRequest

router: APIRouter = APIRouter()


@router.get("/v1/members", response_model=list[MemberTeamDto])
async def search_members_v1(
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MemberTeamDto]:
    """조건에 맞는 회원 전체 목록을 조회합니다.

    Search members without paging.
    """
    return await member_service.search_members(db, condition)


@router.get("/v2/members", response_model=Page[MemberTeamDto])
async def search_members_v2(
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Page[MemberTeamDto]:
    """조건에 맞는 회원을 페이지 단위로 조회합니다.

    Search members one page at a time (separate content and count queries).
    """
    return await member_service.search_members_page(db, condition, page_request)
