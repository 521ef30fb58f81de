"""SQLAlchemy ORM 모델 패키지 (모든 도메인 모델의 중앙 임포트 지점).

SQLAlchemy ORM models package. Importing from this package ensures all
models are registered with the SQLAlchemy metadata, which is required for
schema creation and relationship resolution.

Modules:
    member: 회원 및 팀 (Member and Team)
"""

from member_search.models.member import Member, Team

__all__ = ["Member", "Team"]
