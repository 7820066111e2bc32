"""
Base repository with common CRUD operations.

Feature repositories inherit from it and add their own queries.
Uses SQLAlchemy async session for non-blocking database access.

Usage:
    class ParticipantRepository(BaseRepository[Participant]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, Participant)

        async def get_by_name(self, name: str) -> Participant | None:
            return await self.get_by(name=name)
"""

from typing import TypeVar, Generic, Type
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for database operations.

    Methods flush but never commit; the caller owns the transaction.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Initialize repository.

        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def _filtered(self, query, **kwargs):
        for key, value in kwargs.items():
            query = query.where(getattr(self.model, key) == value)
        return query

    async def get_by_id(self, id: int) -> T | None:
        """Get entity by primary key, None if missing."""
        result = await self.db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_by(self, **kwargs) -> T | None:
        """
        Get first entity matching field values.

        Args:
            **kwargs: Field name-value pairs to filter by

        Returns:
            First matching entity or None
        """
        result = await self.db.execute(self._filtered(select(self.model), **kwargs))
        return result.scalars().first()

    async def create(self, **kwargs) -> T:
        """
        Create new entity.

        Returns:
            Created entity with generated ID
        """
        entity = self.model(**kwargs)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def update(self, entity: T, **kwargs) -> T:
        """Set fields on entity and flush."""
        for key, value in kwargs.items():
            setattr(entity, key, value)
        await self.db.flush()
        return entity

    async def count(self, **kwargs) -> int:
        """Count entities matching field values."""
        query = self._filtered(select(func.count()).select_from(self.model), **kwargs)
        result = await self.db.execute(query)
        return result.scalar() or 0
