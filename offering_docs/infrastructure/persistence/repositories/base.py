"""Base repository: generic lookups and persistence helpers."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from offering_docs.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with ORM-level get, create and flush helpers.

    Subclasses expose DTO-returning methods and keep ORM rows internal.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_orm(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _create_orm(self, obj: ModelType) -> ModelType:
        """Persist a new record inside a savepoint and reload server defaults.

        A failed insert rolls back only the savepoint, so the request
        transaction stays usable for cleanup and audit writes.
        """
        async with self.db.begin_nested():
            self.db.add(obj)
            await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _save_orm(self, obj: ModelType) -> ModelType:
        """Flush pending attribute changes on an attached row and reload it."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj
