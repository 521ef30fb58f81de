"""회원/팀 검색 서비스 패키지.

Member/Team search service: SQLAlchemy repositories with dynamically
composed predicates, exposed through two FastAPI search endpoints.
"""
