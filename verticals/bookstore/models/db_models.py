"""SQLAlchemy models for the bookstore catalog.

The to_dict() method provides the standard serialisation interface used by
repositories and routers.
"""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from core.models.base import Base, IntegerIdMixin


class Book(IntegerIdMixin, Base):
    """A book in the catalog."""

    __tablename__ = "books"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    author: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    language: Mapped[str] = mapped_column(String(20), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    published_year: Mapped[int] = mapped_column(Integer, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "language": self.language,
            "category": self.category,
            "published_year": self.published_year,
        }
