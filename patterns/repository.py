"""Async repository pattern for database access.

Provides a generic base repository with CRUD primitives over one
SQLAlchemy model. Entity repositories subclass this and expose the narrow,
domain-named contract their routers need.

Example: BookRepository extending BaseRepository.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.models.base import Base

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository with CRUD primitives.

    Subclass and set `model` to your SQLAlchemy model::

        class BookRepository(BaseRepository[Book]):
            model = Book

            async def get_books_by_author(self, name: str):
                return await self.list(filters={"author": name})

    Rows are returned as dicts via the model's ``to_dict()``. Writes are
    flushed, never committed; the session owner commits.
    """

    model: type[ModelT]

    # Columns the update path never touches
    immutable_fields: tuple[str, ...] = ("id",)

    def __init__(self, session: AsyncSession):
        self.session = session

    # -- List --

    async def list(self, filters: dict[str, Any] | None = None) -> list[dict]:
        """List rows, optionally filtered by exact column equality."""
        stmt = select(self.model)

        if filters:
            for col_name, value in filters.items():
                if not hasattr(self.model, col_name):
                    raise ValueError(f"Unknown column: {col_name}")
                stmt = stmt.where(getattr(self.model, col_name) == value)

        result = await self.session.execute(stmt)
        return [row.to_dict() for row in result.scalars().all()]

    # -- Get by ID --

    async def get(self, item_id: int) -> dict | None:
        """Get a single row by primary key."""
        row = await self.session.get(self.model, item_id)
        return row.to_dict() if row else None

    # -- Exists --

    async def exists(self, item_id: int) -> bool:
        stmt = select(self.model.id).where(self.model.id == item_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    # -- Create --

    async def create(self, data: dict[str, Any]) -> dict:
        """Insert a row and flush so the store assigns its id."""
        values = {k: v for k, v in data.items() if k not in self.immutable_fields}
        item = self.model(**values)
        self.session.add(item)
        await self.session.flush()
        return item.to_dict()

    # -- Update --

    async def update(self, item_id: int, data: dict[str, Any]) -> dict | None:
        """Overwrite the given fields of an existing row. Returns None if not found."""
        item = await self.session.get(self.model, item_id)
        if not item:
            return None

        for key, value in data.items():
            if hasattr(item, key) and key not in self.immutable_fields:
                setattr(item, key, value)

        await self.session.flush()
        return item.to_dict()

    # -- Delete --

    async def delete(self, item_id: int) -> bool:
        """Delete a row. Returns True if deleted, False if not found."""
        item = await self.session.get(self.model, item_id)
        if not item:
            return False

        await self.session.delete(item)
        await self.session.flush()
        return True
