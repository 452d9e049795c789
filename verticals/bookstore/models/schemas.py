"""Pydantic schemas for book request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class BookBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    author: str = Field(..., min_length=1, max_length=50)
    language: str = Field(..., min_length=1, max_length=20)
    category: str = Field(..., min_length=1, max_length=50)
    published_year: int = Field(..., ge=1450, le=2100)


class BookCreate(BookBase):
    # Ignored; the store assigns ids
    id: Optional[int] = None


class BookUpdate(BookBase):
    """Full replacement of a book. ``id`` must match the path when given."""

    id: Optional[int] = None


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class BookResponse(BookBase):
    id: int
