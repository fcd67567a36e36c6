"""
Generic async repository (Data Access Layer).

Implements the Repository pattern on top of SQLAlchemy's ``AsyncSession``.
Concrete repositories inherit from ``BaseRepository[T]`` and add
entity-specific queries.

- Every call is routed through ``db_circuit_breaker`` so a dead database
  produces fast failures instead of piling up waiting requests.
- **OperationalError** during commit rolls the session back and re-raises,
  so a dirty transaction never leaks into the next call.
- **IntegrityError** is NOT caught here; services translate it.
"""

import logging
from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlmodel import SQLModel

from app.core.resilience import db_circuit_breaker

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic CRUD repository for SQLModel entities.

    Parameters
    ----------
    model : Type[ModelType]
        The SQLModel class this repository manages.
    db : AsyncSession
        An active async database session (injected per-request).
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    async def _execute_with_circuit_breaker(self, func: Any, *args: Any, **kwargs: Any) -> Any:
        return await db_circuit_breaker.call(func, *args, **kwargs)

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except OperationalError:
            await self.db.rollback()
            logger.error("OperationalError during %s for %s", operation, self.model.__name__)
            raise

    async def get(self, id: Any) -> Optional[ModelType]:
        """Fetch a single entity by primary key.  Returns ``None`` if not found."""

        async def _get() -> Optional[ModelType]:
            return await self.db.get(self.model, id)

        return await self._execute_with_circuit_breaker(_get)

    async def get_all(
        self,
        skip: int = 0,
        limit: Optional[int] = 100,
        order_by: Optional[Sequence[Any]] = None,
    ) -> List[ModelType]:
        """
        Return a page of entities.

        Without ``order_by`` rows are ordered by primary key so pagination is
        deterministic.  ``limit=None`` returns every row after ``skip``.
        """

        async def _get_all() -> List[ModelType]:
            ordering = order_by or tuple(self.model.__table__.primary_key.columns)
            stmt = select(self.model).order_by(*ordering).offset(skip)
            if limit is not None:
                stmt = stmt.limit(limit)
            result = await self.db.execute(stmt)
            return list(result.scalars().all())

        return await self._execute_with_circuit_breaker(_get_all)

    async def create(self, obj_in: ModelType) -> ModelType:
        """Insert a new entity and return the refreshed instance."""

        async def _create() -> ModelType:
            self.db.add(obj_in)
            await self._commit("create")
            await self.db.refresh(obj_in)
            return obj_in

        return await self._execute_with_circuit_breaker(_create)

    async def update(self, entity: ModelType) -> ModelType:
        """
        Persist changes to an already-tracked entity.

        The caller mutates the entity first; we merge, commit and refresh.
        """

        async def _update() -> ModelType:
            merged = await self.db.merge(entity)
            await self._commit("update")
            await self.db.refresh(merged)
            return merged

        return await self._execute_with_circuit_breaker(_update)

    async def count(self) -> int:
        """Return the total number of entities of this type."""

        async def _count() -> int:
            stmt = select(func.count()).select_from(self.model)
            result = await self.db.execute(stmt)
            return result.scalar_one()

        return await self._execute_with_circuit_breaker(_count)

    async def delete(self, id: Any) -> bool:
        """Delete by primary key.  Returns ``False`` if nothing matched."""

        async def _delete() -> bool:
            entity = await self.db.get(self.model, id)
            if entity is None:
                return False
            await self.db.delete(entity)
            await self._commit("delete")
            return True

        return await self._execute_with_circuit_breaker(_delete)
