"""Base repository: generic lookup, add, remove and the flush/commit policy."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_model, add and remove.

    With autocommit=False writes are flushed and the caller's transaction
    (get_db_transactional) commits. With autocommit=True every write is
    committed immediately; the workflow engine uses this so steps and ticket
    changes persist as they happen.
    """

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelType],
        *,
        autocommit: bool = False,
    ) -> None:
        self.db = db
        self.model = model
        self.autocommit = autocommit

    async def get_model(self, entity_id: str) -> ModelType | None:
        """Return a single row by primary key (reloaded from the database), or None."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def add(self, obj: ModelType) -> ModelType:
        """Persist a new row and return it refreshed."""
        self.db.add(obj)
        await self._save()
        await self.db.refresh(obj)
        return obj

    async def remove(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self._save()

    async def _save(self) -> None:
        """Flush pending changes; commit too when autocommit is on."""
        await self.db.flush()
        if self.autocommit:
            await self.db.commit()
