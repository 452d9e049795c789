"""Credential verification backed by the user store."""

import structlog
from starlette.concurrency import run_in_threadpool

from core.auth.passwords import PasswordHasher
from core.config import AuthConfig
from core.exceptions import DuplicateUserError, InvalidCredentialsError
from verticals.accounts.repository import UserRepository

logger = structlog.get_logger(__name__)


class CredentialVerifier:
    """Authenticate a username/password pair against stored bcrypt hashes."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self.users = users
        self.hasher = hasher

    async def verify(self, username: str, password: str) -> str:
        """Return the canonical username on success.

        Raises:
            InvalidCredentialsError: Unknown user or wrong password. Both
                cases take the same path through bcrypt.
        """
        user = await self.users.get_by_username(username)
        password_hash = user.password_hash if user else None
        if not await run_in_threadpool(self.hasher.verify, password, password_hash):
            raise InvalidCredentialsError(username)
        return user.username


async def ensure_seed_user(
    users: UserRepository, hasher: PasswordHasher, config: AuthConfig
) -> bool:
    """Insert the configured seed user if it is missing.

    Returns True when a user was created.
    """
    if not config.seed_enabled:
        return False
    if await users.username_or_email_taken(config.seed_username, config.seed_email):
        logger.info("Seed user already present", username=config.seed_username)
        return False

    try:
        await users.create_user(
            {
                "username": config.seed_username,
                "email": config.seed_email,
                "password_hash": hasher.hash(config.seed_password),
                "mobile_number": None,
            }
        )
    except DuplicateUserError:
        # Another worker seeded it between the check and the insert
        return False

    logger.info("Seed user created", username=config.seed_username)
    return True
