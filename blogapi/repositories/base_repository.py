"""Repository interface shared by every record kind.

Handlers only talk to the methods declared on ``Repository`` so that an
in-memory implementation can stand in for the SQL one.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blogapi.models.base import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class Repository(ABC, Generic[ModelT]):
    @abstractmethod
    async def find_by_id(self, record_id: str) -> Optional[ModelT]:
        ...

    @abstractmethod
    async def find(self, order_by: Sequence[str] = (), **filters: Any) -> List[ModelT]:
        """Records whose attributes equal every keyword in ``filters``.

        ``order_by`` names attributes to sort on; a leading ``-`` sorts descending.
        """

    @abstractmethod
    async def create(self, values: Dict[str, Any]) -> ModelT:
        ...

    @abstractmethod
    async def update(self, record_id: str, values: Dict[str, Any]) -> Optional[ModelT]:
        """Replace fields of one record and return it, or ``None`` if it is gone."""

    @abstractmethod
    async def delete(self, record_id: str) -> Optional[ModelT]:
        """Remove one record and return what was removed."""


class SQLRepository(Repository[ModelT]):
    """SQLAlchemy implementation; one session per call so calls can run concurrently."""

    model: Type[ModelT]

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    def _ordering(self, order_by: Sequence[str]):
        clauses = []
        for name in order_by:
            if name.startswith("-"):
                clauses.append(getattr(self.model, name[1:]).desc())
            else:
                clauses.append(getattr(self.model, name).asc())
        return clauses

    async def find_by_id(self, record_id: str) -> Optional[ModelT]:
        async with self.session_factory() as db:
            return await db.get(self.model, record_id)

    async def find(self, order_by: Sequence[str] = (), **filters: Any) -> List[ModelT]:
        stmt = select(self.model).filter_by(**filters).order_by(*self._ordering(order_by))
        async with self.session_factory() as db:
            result = await db.execute(stmt)
            return list(result.scalars().all())

    async def create(self, values: Dict[str, Any]) -> ModelT:
        record = self.model(**values)
        async with self.session_factory() as db:
            db.add(record)
            await db.commit()
            await db.refresh(record)
        return record

    async def update(self, record_id: str, values: Dict[str, Any]) -> Optional[ModelT]:
        stmt = (
            update(self.model)
            .where(self.model.id == record_id)
            .values(**values)
            .returning(self.model)
            .execution_options(synchronize_session=False)
        )
        async with self.session_factory() as db:
            result = await db.execute(stmt)
            record = result.scalar_one_or_none()
            await db.commit()
        return record

    async def delete(self, record_id: str) -> Optional[ModelT]:
        stmt = (
            delete(self.model)
            .where(self.model.id == record_id)
            .returning(self.model)
            .execution_options(synchronize_session=False)
        )
        async with self.session_factory() as db:
            result = await db.execute(stmt)
            record = result.scalar_one_or_none()
            await db.commit()
        return record
