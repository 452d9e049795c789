"""Base model and mixins for all SQLAlchemy models.

Provides:
- Base: Declarative base class for all models
- IntegerIdMixin: Adds a store-generated integer primary key

Identifiers are assigned by the database on insert and never change
afterwards; repositories never write to ``id``.
"""

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all bookstore models."""
    pass


class IntegerIdMixin:
    """Mixin providing an autoincrementing integer primary key."""

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
