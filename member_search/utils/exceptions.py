"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns
so repositories and services can raise without spelling out status codes.

Usage:
    from member_search.utils.exceptions import BadRequestError
    raise BadRequestError("No sortable property 'password'")
"""

from fastapi import HTTPException, status


class BadRequestError(HTTPException):
    """400 Bad Request 예외 (잘못된 요청 데이터).

    Raised when request data is invalid beyond what Pydantic validation
    catches (e.g. an unknown sort property).
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NonUniqueResultError(HTTPException):
    """단일 결과 쿼리가 여러 행을 반환한 경우.

    Raised when a single-result query matches more than one row.
    This is a server-side fault: the query contract was violated, so it
    surfaces as 500 if it escapes a request.
    """

    def __init__(self, detail: str = "Query did not return a unique result") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
