"""
Base repository pattern implementation

Generic async CRUD helpers shared by the per-table repositories. Helpers take
the session explicitly; the public repository methods get theirs from
``async_with_session``.
"""

from abc import ABC
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Asynchronous base Repository class, providing common CRUD operations

    Generic parameters:
        ModelType: SQLAlchemy model type
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get_by_id(self, session: AsyncSession, record_id: Any) -> Optional[ModelType]:
        """
        Get single record by primary key

        Args:
            session: Asynchronous database session
            record_id: Record ID

        Returns:
            Model instance or None
        """
        return await session.get(self.model, record_id)

    async def get_one_by(self, session: AsyncSession, **filters) -> Optional[ModelType]:
        """Get the first record whose columns equal the given values"""
        stmt = self._apply_filters(select(self.model), filters).limit(1)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_multi(
            self,
            session: AsyncSession,
            filters: Dict[str, Any] = None,
            order_by: str = None
    ) -> List[ModelType]:
        """
        Get multiple records

        Args:
            session: Asynchronous database session
            filters: Filter condition dictionary
            order_by: Sort field, "-field" for descending

        Returns:
            List of model instances
        """
        stmt = select(self.model)
        if filters:
            stmt = self._apply_filters(stmt, filters)
        if order_by:
            stmt = self._apply_order_by(stmt, order_by)

        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, session: AsyncSession, obj_in: Any = None, **kwargs) -> ModelType:
        """
        Create new record

        Args:
            session: Asynchronous database session
            obj_in: Pydantic model or dict with column values
            **kwargs: Extra column values

        Returns:
            Created model instance, flushed so it has an ID
        """
        if hasattr(obj_in, "model_dump"):
            obj_data = obj_in.model_dump(exclude_unset=True)
        else:
            obj_data = dict(obj_in) if obj_in else {}
        obj_data.update(kwargs)

        db_obj = self.model(**obj_data)
        session.add(db_obj)
        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def update(self, session: AsyncSession, db_obj: ModelType, obj_in: Any = None, **kwargs) -> ModelType:
        """
        Update record

        Args:
            session: Asynchronous database session
            db_obj: Model instance to update
            obj_in: Pydantic model or dict with new values, unset fields skipped
            **kwargs: Extra column values

        Returns:
            Updated model instance
        """
        if hasattr(obj_in, "model_dump"):
            update_data = obj_in.model_dump(exclude_unset=True)
        else:
            update_data = dict(obj_in) if obj_in else {}
        update_data.update(kwargs)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def delete(self, session: AsyncSession, record_id: Any) -> Optional[ModelType]:
        """
        Delete record

        Returns:
            Deleted model instance or None
        """
        obj = await self.get_by_id(session, record_id)
        if obj:
            await session.delete(obj)
            await session.flush()
        return obj

    def _apply_filters(self, stmt, filters: Dict[str, Any]):
        """
        Apply filter conditions

        Supports exact matches and {"like": ..., "in": ..., "is_null": bool}.
        """
        for key, value in filters.items():
            if not hasattr(self.model, key):
                continue
            column = getattr(self.model, key)

            if isinstance(value, dict):
                if "like" in value:
                    stmt = stmt.where(column.like(f"%{value['like']}%"))
                if "in" in value:
                    stmt = stmt.where(column.in_(value["in"]))
                if "is_null" in value:
                    stmt = stmt.where(column.is_(None) if value["is_null"] else column.is_not(None))
            elif value is not None:
                stmt = stmt.where(column == value)

        return stmt

    def _apply_order_by(self, stmt, order_by: str):
        """Apply sorting, "field" ascending or "-field" descending"""
        descending = order_by.startswith("-")
        field = order_by[1:] if descending else order_by
        if hasattr(self.model, field):
            column = getattr(self.model, field)
            stmt = stmt.order_by(column.desc() if descending else column)
        return stmt
