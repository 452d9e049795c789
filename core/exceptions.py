"""Domain exceptions raised below the HTTP layer.

Routers translate these into ``HTTPException`` responses; nothing in
``core`` or the repositories knows about status codes.
"""


class BookstoreError(Exception):
    """Base class for all service errors."""


class AuthError(BookstoreError):
    """Base class for authentication failures."""


class InvalidCredentialsError(AuthError):
    """Username unknown or password does not match."""


class InvalidTokenError(AuthError):
    """Bearer token is malformed, expired or signed by someone else."""


class DuplicateUserError(BookstoreError):
    """A user with the same username or email already exists."""

    def __init__(self, username: str):
        super().__init__("Username or email already exists.")
        self.username = username
