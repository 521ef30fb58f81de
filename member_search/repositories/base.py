"""기본 레포지토리 (모든 레포지토리의 부모 클래스).

Base Repository: Parent class for all domain repositories.
Provides persistence, lookup, single-result and bulk operations for one model.

Bulk statements (:meth:`BaseRepository.bulk_update`,
:meth:`BaseRepository.bulk_delete`) go straight to the database and do not
touch objects already loaded in the session. Call ``db.expire_all()`` (or
re-query with ``populate_existing``) before reading those objects again.

Usage:
    class MemberRepository(BaseRepository[Member]):
        def __init__(self) -> None:
            super().__init__(Member)
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import ColumnElement, Select, delete, func, select, update
from sqlalchemy.exc import MultipleResultsFound
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.database import Base
from member_search.utils.exceptions import NonUniqueResultError

# 제네릭 타입 변수 (SQLAlchemy 모델)
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 레포지토리.

    Generic repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def save(self, db: AsyncSession, entity: ModelType) -> ModelType:
        """새 엔티티를 영속화합니다.

        Make a transient entity persistent. The session is flushed so the
        generated id is available on return; committing is up to the caller.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            entity: 저장할 엔티티 (Transient entity to persist)

        Returns:
            ModelType: 저장된 엔티티 (The same instance, now persistent)
        """
        db.add(entity)
        await db.flush()
        return entity

    async def find_by_id(self, db: AsyncSession, record_id: Any) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다 (세션 캐시 우선).

        Look up a record by primary key. Objects already in the session's
        identity map are returned without a round trip.

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        return await db.get(self.model, record_id)

    async def find_all(self, db: AsyncSession) -> Sequence[ModelType]:
        """모든 레코드를 조회합니다 (정렬 없음).

        Retrieve every record, in database order.
        """
        result = await db.execute(select(self.model))
        return result.scalars().all()

    async def fetch_one(self, db: AsyncSession, query: Select[Any]) -> Any | None:
        """단일 결과 쿼리를 실행합니다.

        Execute ``query`` expecting at most one row and return its first
        column (the entity for ``select(Model)``).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            query: 실행할 SELECT 쿼리 (SELECT query to run)

        Returns:
            Any | None: 결과 또는 None (The single result, or None)

        Raises:
            NonUniqueResultError: 결과가 두 건 이상인 경우 (More than one row matched)
        """
        result = await db.execute(query)
        try:
            return result.scalar_one_or_none()
        except MultipleResultsFound as exc:
            raise NonUniqueResultError() from exc

    async def fetch_first(self, db: AsyncSession, query: Select[Any]) -> Any | None:
        """첫 번째 결과만 조회합니다 (LIMIT 1). Returns the first row or None."""
        result = await db.execute(query.limit(1))
        return result.scalars().first()

    async def count(self, db: AsyncSession, query: Select[Any] | None = None) -> int:
        """레코드 수를 셉니다.

        Count the rows of ``query`` (wrapped as a subquery) or, without a
        query, of the whole table.
        """
        if query is None:
            count_query: Select[Any] = select(func.count()).select_from(self.model)
        else:
            count_query = select(func.count()).select_from(query.subquery())
        return (await db.execute(count_query)).scalar() or 0

    async def bulk_update(
        self,
        db: AsyncSession,
        where: ColumnElement[bool] | None,
        values: dict[str, Any],
    ) -> int:
        """조건에 맞는 레코드를 일괄 수정합니다.

        Issue a single UPDATE statement. Loaded objects are not synchronized.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            where: 수정 대상 조건, None이면 전체 (Row filter; None updates every row)
            values: 컬럼명과 값/식 (Column name to new value or SQL expression)

        Returns:
            int: 수정된 행 수 (Number of affected rows)
        """
        stmt = update(self.model).values(**values).execution_options(synchronize_session=False)
        if where is not None:
            stmt = stmt.where(where)
        result = await db.execute(stmt)
        return result.rowcount

    async def bulk_delete(self, db: AsyncSession, where: ColumnElement[bool] | None) -> int:
        """조건에 맞는 레코드를 일괄 삭제합니다.

        Issue a single DELETE statement. Loaded objects are not synchronized.

        Returns:
            int: 삭제된 행 수 (Number of deleted rows)
        """
        stmt = delete(self.model).execution_options(synchronize_session=False)
        if where is not None:
            stmt = stmt.where(where)
        result = await db.execute(stmt)
        return result.rowcount
