"""Async SQLAlchemy database engine and session management.

Provides the async database layer with:
- Connection pooling (configurable pool_size/max_overflow, skipped for SQLite)
- FastAPI dependency injection via get_session()
- Automatic session lifecycle (commit on success, rollback on error)
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import DatabaseConfig, settings

# ---------------------------------------------------------------------------
# Engine & session factory
# ---------------------------------------------------------------------------


def build_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create an async engine for ``config.url``.

    SQLite uses a single-connection pool, so the pool sizing arguments are
    only passed for server databases.
    """
    kwargs: dict[str, Any] = {"echo": config.echo}
    if not config.is_sqlite:
        kwargs.update(
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_pre_ping=True,
        )
    return create_async_engine(config.url, **kwargs)


engine = build_engine(settings.database)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session with automatic commit/rollback.

    Usage in FastAPI routes::

        @router.get("/items")
        async def list_items(session: AsyncSession = Depends(get_session)):
            result = await session.execute(select(Item))
            return result.scalars().all()
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_session_context() -> AsyncGenerator[AsyncSession, None]:
    """Context manager variant for non-FastAPI code (startup hooks, scripts)."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create tables from the ORM metadata."""
    from core.models.base import Base

    # Register every model on Base.metadata before create_all
    import verticals.accounts.models.db_models  # noqa: F401
    import verticals.bookstore.models.db_models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the connection pool on shutdown."""
    await engine.dispose()
