"""Book repository — async database access for the catalog.

Extends BaseRepository with the catalog contract used by the book router:
list, lookup by id, exact author/category filters, create, full-replacement
update, idempotent delete and an existence check.
"""

from typing import Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from patterns.repository import BaseRepository
from verticals.bookstore.models.db_models import Book


class BookRepository(BaseRepository[Book]):
    """Repository for book CRUD and filter operations."""

    model = Book

    async def get_books(self) -> list[dict]:
        """All books in store-native order."""
        return await self.list()

    async def get_book_by_id(self, book_id: int) -> dict | None:
        return await self.get(book_id)

    async def get_books_by_author(self, author: str) -> list[dict]:
        """Books whose author matches exactly (store collation applies)."""
        return await self.list(filters={"author": author})

    async def get_books_by_category(self, category: str) -> list[dict]:
        return await self.list(filters={"category": category})

    async def create_book(self, data: dict[str, Any]) -> dict:
        """Insert a book; any ``id`` in ``data`` is ignored."""
        return await self.create(data)

    async def update_book(self, book_id: int, data: dict[str, Any]) -> dict | None:
        """Replace every mutable field of the book. No-op when absent."""
        return await self.update(book_id, data)

    async def delete_book(self, book_id: int) -> None:
        """Remove the book if present; absent ids are not an error."""
        await self.delete(book_id)

    async def book_exists(self, book_id: int) -> bool:
        return await self.exists(book_id)


# ---------------------------------------------------------------------------
# FastAPI dependency factory
# ---------------------------------------------------------------------------

def get_book_repository(
    session: AsyncSession = Depends(get_session),
) -> BookRepository:
    """FastAPI dependency for BookRepository."""
    return BookRepository(session)
