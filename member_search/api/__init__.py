"""API 라우터 패키지 (HTTP endpoints).

Included routers:
    - members: 회원 검색 v1/v2 (Member search, unpaged and paged)
"""

from fastapi import APIRouter

from member_search.api.members import router as members_router

api_router: APIRouter = APIRouter()

api_router.include_router(members_router, tags=["Members"])
