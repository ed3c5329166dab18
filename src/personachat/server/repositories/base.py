"""Base repository pattern for all data access."""

from typing import Any, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import InvalidQueryError
from ..database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    All repositories should inherit from this class.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def get(self, id: str) -> Optional[ModelType]:
        """Get single record by primary key."""
        return await self.session.get(self.model, id)

    def column(self, name: str):
        """Mapped column by name. Unknown names raise InvalidQueryError."""
        if name not in self.model.__table__.columns:
            raise InvalidQueryError(f"unknown column '{name}' on {self.model.__tablename__}")
        return getattr(self.model, name)

    async def query(
        self,
        filters: Optional[dict[str, Any]] = None,
        order_by: Sequence[Tuple[str, bool]] = (),
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        """
        Equality-filtered, ordered, limited select.

        Args:
            filters: Column name to required value
            order_by: (column name, descending) pairs, applied in order
            limit: Maximum number of rows
        """
        query = select(self.model)
        for name, value in (filters or {}).items():
            query = query.where(self.column(name) == value)
        for name, descending in order_by:
            column = self.column(name)
            query = query.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create(self, **data) -> ModelType:
        """Create new record."""
        instance = self.model(**data)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def exists(self, id: str) -> bool:
        """Check if record exists."""
        return await self.get(id) is not None
