"""User repository: async database access for accounts.

Username and email uniqueness is owned by the unique indexes on ``users``;
``create_user`` turns the resulting IntegrityError into DuplicateUserError
instead of checking first and inserting second.
"""

from typing import Any

import structlog
from fastapi import Depends
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from core.exceptions import DuplicateUserError
from patterns.repository import BaseRepository
from verticals.accounts.models.db_models import User

logger = structlog.get_logger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user lookup and registration."""

    model = User

    async def get_by_username(self, username: str) -> User | None:
        """Return the ORM row, including the password hash, or None."""
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def username_or_email_taken(self, username: str, email: str) -> bool:
        stmt = select(User.id).where(or_(User.username == username, User.email == email))
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def create_user(self, data: dict[str, Any]) -> dict:
        """Insert a user whose ``data`` already carries ``password_hash``.

        Raises:
            DuplicateUserError: If the username or email is already stored.
        """
        try:
            return await self.create(data)
        except IntegrityError as exc:
            await self.session.rollback()
            logger.warning(
                "User insert hit unique constraint",
                username=data.get("username"),
                error=str(exc.orig),
            )
            raise DuplicateUserError(data.get("username", "")) from exc


# ---------------------------------------------------------------------------
# FastAPI dependency factory
# ---------------------------------------------------------------------------

def get_user_repository(
    session: AsyncSession = Depends(get_session),
) -> UserRepository:
    """FastAPI dependency for UserRepository."""
    return UserRepository(session)
